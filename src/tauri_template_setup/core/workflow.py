"""Generate the release workflow from the selected platforms and signing methods.

The document is rebuilt whole on every run rather than patched: the matrix
rows, the Linux system-package step and the signing secrets differ too much
between selections for substitution to work.
"""

from collections.abc import Iterable
from pathlib import Path

from tauri_template_setup.core.catalog import Catalog, Platform, SigningMethod
from tauri_template_setup.utils.console import StatusConsole
from tauri_template_setup.utils.logging import get_logger

logger = get_logger(__name__)


def _expr(expression: str) -> str:
    """Wrap an Actions expression, e.g. ``${{ matrix.platform }}``."""
    return "${{ " + expression + " }}"


def _yaml_value(value: str) -> str:
    return value if value else '""'


def _matrix_row(platform: Platform) -> list[str]:
    return [
        f"          - platform: {platform.runner}",
        f"            args: {_yaml_value(platform.args)}",
        f"            rust_targets: {_yaml_value(platform.rust_targets)}",
    ]


def _system_packages_step(platform: Platform) -> list[str]:
    return [
        "      - name: Install dependencies (Ubuntu only)",
        f"        if: matrix.platform == '{platform.runner}'",
        "        run: |",
        "          sudo apt-get update",
        f"          sudo apt-get install -y {' '.join(platform.system_packages)}",
        "",
    ]


def _signing_env(method: SigningMethod) -> list[str]:
    lines = [f"          # {method.comment}"]
    lines.extend(f"          {secret}: {_expr(f'secrets.{secret}')}" for secret in method.secrets)
    return lines


def generate_publish_workflow(
    platforms: Iterable[str], signing: Iterable[str], catalog: Catalog
) -> str:
    """Render the publish workflow for a platform/signing selection.

    Pure and deterministic: the same selections (in any order) always give
    byte-identical output. Rows follow catalog order; unknown tags are
    ignored.

    Args:
        platforms: Selected platform tags.
        signing: Selected signing method tags.
        catalog: Template catalog providing platform and signing details.

    Returns:
        The complete workflow document.
    """
    platform_tags = set(platforms)
    signing_tags = set(signing)
    rows = [p for p in catalog.platforms if p.tag in platform_tags]
    methods = [m for m in catalog.signing_methods if m.tag in signing_tags]

    lines = [
        "name: Publish Release",
        "",
        "on:",
        "  push:",
        "    tags:",
        '      - "v*"',
        "",
        "permissions:",
        "  contents: write",
        "",
        "jobs:",
        "  publish-tauri:",
        "    strategy:",
        "      fail-fast: false",
        "      matrix:",
        "        include:",
    ]
    for platform in rows:
        lines.extend(_matrix_row(platform))
    lines.extend(
        [
            "",
            f"    runs-on: {_expr('matrix.platform')}",
            "    steps:",
            "      - uses: actions/checkout@v4",
            "",
            "      - name: Setup Bun",
            "        uses: oven-sh/setup-bun@v2",
            "        with:",
            "          bun-version: latest",
            "",
            "      - name: Install Rust stable",
            "        uses: dtolnay/rust-toolchain@stable",
            "        with:",
            f"          targets: {_expr('matrix.rust_targets')}",
            "",
            "      - name: Rust cache",
            "        uses: swatinem/rust-cache@v2",
            "        with:",
            f'          workspaces: "./{catalog.native_dir} -> target"',
            "",
        ]
    )
    for platform in rows:
        if platform.system_packages:
            lines.extend(_system_packages_step(platform))
    lines.extend(
        [
            "      - name: Install frontend dependencies",
            "        run: bun install --frozen-lockfile",
            "",
            "      - name: Build Tauri app",
            "        uses: tauri-apps/tauri-action@v0",
            "        env:",
            f"          GITHUB_TOKEN: {_expr('secrets.GITHUB_TOKEN')}",
        ]
    )
    for method in methods:
        lines.extend(_signing_env(method))
    changelog = f"https://github.com/{_expr('github.repository')}/blob/main/CHANGELOG.md"
    lines.extend(
        [
            "        with:",
            f"          tagName: {_expr('github.ref_name')}",
            f'          releaseName: "{_expr("github.ref_name")}"',
            f'          releaseBody: "See [CHANGELOG]({changelog}) for details."',
            "          releaseDraft: true",
            "          prerelease: false",
            "          includeUpdaterJson: true",
            f"          args: {_expr('matrix.args')}",
        ]
    )
    return "\n".join(lines) + "\n"


def write_publish_workflow(
    root: Path,
    platforms: Iterable[str],
    signing: Iterable[str],
    catalog: Catalog,
    status: StatusConsole,
) -> bool:
    """Replace the committed publish workflow with a freshly generated one.

    Callers must not invoke this with an empty platform selection; the
    existing workflow is kept in that case.

    Returns:
        True if the workflow was written. A missing workflow file means the
        project opted out of releases and is skipped with a warning.
    """
    path = root / catalog.publish_workflow
    name = Path(catalog.publish_workflow).name
    if not path.exists():
        status.warn(f"{name} not found, skipping workflow customization")
        return False

    content = generate_publish_workflow(platforms, signing, catalog)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        status.warn(f"Failed to update {name}")
        logger.info("Workflow write failed", path=str(path), error=str(e))
        return False

    status.success(f"Updated {catalog.publish_workflow} with selected platforms")
    return True
