"""Work out whether setup should run in this checkout.

The template check is a heuristic: a remote URL mentioning the template's
canonical name, or a git top-level directory carrying that name. It can be
bypassed with ``force`` (``--force`` / ``TAURI_SETUP_FORCE``) when a real
project happens to match.
"""

from enum import Enum
from pathlib import Path

from tauri_template_setup.core.catalog import Catalog
from tauri_template_setup.core.commands import Runner
from tauri_template_setup.core.exceptions import CommandError
from tauri_template_setup.utils.logging import get_logger

logger = get_logger(__name__)


class RepositoryState(Enum):
    TEMPLATE_SOURCE = "template-source"
    FRESH_COPY = "fresh-copy"
    ALREADY_CONFIGURED = "already-configured"


def is_template_repo(root: Path, catalog: Catalog, runner: Runner) -> bool:
    """Return True when the checkout looks like the template's own repository.

    Any git failure (no repository, git missing) means "not the template".
    """
    name = catalog.template.name
    try:
        remotes = runner.run(["git", "remote", "-v"], cwd=root)
        if name in remotes:
            return True
        # Remotes may not be configured yet; fall back to the directory name.
        top_level = runner.run(["git", "rev-parse", "--show-toplevel"], cwd=root).strip()
    except CommandError as e:
        logger.debug("Git query failed, assuming generated project", error=str(e))
        return False
    return bool(top_level) and Path(top_level).name == name


def is_already_configured(root: Path, catalog: Catalog) -> bool:
    """Return True once the personalization marker is gone from the shell manifest."""
    manifest = root / catalog.shell_manifest
    if not manifest.exists():
        return False
    try:
        content = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read manifest", path=str(manifest), error=str(e))
        return False
    return catalog.template.marker not in content


def detect(root: Path, catalog: Catalog, runner: Runner, *, force: bool = False) -> RepositoryState:
    """Classify the checkout. Read-only; never raises for git problems.

    Args:
        root: Project root.
        catalog: Template description.
        runner: Command runner used for git queries.
        force: Skip the template-repository heuristic.

    Returns:
        The repository state.
    """
    if not force and is_template_repo(root, catalog, runner):
        state = RepositoryState.TEMPLATE_SOURCE
    elif is_already_configured(root, catalog):
        state = RepositoryState.ALREADY_CONFIGURED
    else:
        state = RepositoryState.FRESH_COPY
    logger.debug("Detected repository state", root=str(root), state=state.value)
    return state
