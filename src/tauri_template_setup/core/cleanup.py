"""Remove what only the template needs once personalization is done."""

from pathlib import Path

from tauri_template_setup.core.catalog import Catalog
from tauri_template_setup.core.rewrite import delete_file, rewrite_file, template_residue_rules
from tauri_template_setup.utils.console import StatusConsole


def strip_setup_hooks(root: Path, catalog: Catalog, status: StatusConsole) -> bool:
    """Drop the setup hooks and the create CLI entry from the package manifest.

    Must run before the package lockfile is regenerated: the package manager
    would otherwise fire ``postinstall`` and start setup again underneath
    the current run.

    Returns:
        True if the manifest changed.
    """
    return rewrite_file(root, catalog.package_manifest, template_residue_rules(catalog), status)


def cleanup_template(root: Path, catalog: Catalog, status: StatusConsole) -> list[str]:
    """Delete the template-only files.

    Runs after every rewrite and bootstrap step so an earlier failure leaves
    the setup script in place for a rerun.

    Returns:
        Relative paths that were deleted.
    """
    return [path for path in catalog.template_only_files if delete_file(root, path, status)]
