"""Command-line entry point for tauri-template-setup.

Runs without arguments, usually from the template's postinstall hook, and
exits 0 silently when the checkout is the template itself or has already
been personalized.
"""

import sys
from pathlib import Path

import click
from structlog.stdlib import BoundLogger

from tauri_template_setup import __version__
from tauri_template_setup.core.config import Settings
from tauri_template_setup.core.prompts import ConsolePrompter
from tauri_template_setup.core.setup import run_setup
from tauri_template_setup.utils.logging import get_logger, setup_logging

logger: BoundLogger = get_logger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="tauri-template-setup")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root to personalize (defaults to the current directory).",
)
@click.option(
    "--force",
    is_flag=True,
    help="Run even if the checkout looks like the template repository.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def cli(root: Path | None, force: bool, debug: bool) -> None:
    """Personalize a fresh create-tauri-react-app checkout."""
    settings = Settings(
        log_level="DEBUG" if debug else None,
        force=True if force else None,
    )
    setup_logging(
        level=settings.log_level,
        json_logs=settings.json_logs,
        include_timestamp=settings.include_timestamp,
    )

    project_root = (root or Path.cwd()).resolve()
    logger.debug("Starting setup", root=str(project_root), force=settings.force)

    try:
        run_setup(project_root, prompter=ConsolePrompter(), force=settings.force)
    except Exception as e:
        logger.exception("Setup failed", error=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


def main() -> None:
    """Console-script entry point."""
    cli()


if __name__ == "__main__":
    main()
