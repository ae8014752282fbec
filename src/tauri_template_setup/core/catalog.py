"""Static configuration data describing the template and its choices.

The template identity holds the literal values the unpersonalized checkout
carries. Rewrite anchors, the personalization marker and the context
heuristics are all derived from it, so changing a default in the template
means changing one field here.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath

TEMPLATE_UPDATER_PUBKEY = (
    "dW50cnVzdGVkIGNvbW1lbnQ6IG1pbmlzaWduIHB1YmxpYyBrZXk6IDhCRTAwNUQ4NEJFREVEMjQK"
    "UldRazdlMUwyQVhnaTRYMDVwK0c0REs0dVptUWVpY0tpZ0U0STVyTlZvMU42NmZSekttS0ZtY3UK"
)


@dataclass(frozen=True)
class TemplateIdentity:
    """Literal identity values baked into the template checkout."""

    name: str = "create-tauri-react-app"
    owner: str = "somus"
    identifier: str = "com.somu.create-tauri-react-app"
    library_name: str = "create_tauri_react_app_lib"
    html_title: str = "Tauri + React + Typescript"
    native_description: str = "A Tauri App"
    native_authors: str = '["you"]'
    updater_pubkey: str = TEMPLATE_UPDATER_PUBKEY
    readme_title: str = "Tauri + React Template"
    readme_description: str = (
        "A modern desktop application template using **Tauri v2**, **React 19**, "
        "and **TypeScript**."
    )
    fallback_project_name: str = "my-app"
    default_owner: str = "example"
    default_description: str = "A Tauri desktop application"

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.name}"

    @property
    def updater_endpoint(self) -> str:
        return f"{self.repository_url}/releases/latest/download/latest.json"

    @property
    def marker(self) -> str:
        """Manifest field that only an unpersonalized checkout still carries."""
        return f'"productName": "{self.name}"'


@dataclass(frozen=True)
class Platform:
    """A release build target offered in the platform prompt.

    Attributes:
        tag: Stable value stored in the answer record.
        label: Text shown in the prompt.
        runner: CI runner image the matrix row runs on.
        args: Extra arguments passed to the bundler (empty for host target).
        rust_targets: Extra compiler target triple to install.
        system_packages: Native libraries that must be installed on the
            runner before building.
    """

    tag: str
    label: str
    runner: str
    args: str = ""
    rust_targets: str = ""
    system_packages: tuple[str, ...] = ()


@dataclass(frozen=True)
class SigningMethod:
    """A code-signing option and the CI secrets it needs."""

    tag: str
    label: str
    comment: str
    secrets: tuple[str, ...]


PLATFORMS: tuple[Platform, ...] = (
    Platform(
        tag="macos-arm64",
        label="macOS (Apple Silicon)",
        runner="macos-latest",
        args="--target aarch64-apple-darwin",
        rust_targets="aarch64-apple-darwin",
    ),
    Platform(
        tag="macos-x64",
        label="macOS (Intel)",
        runner="macos-latest",
        args="--target x86_64-apple-darwin",
        rust_targets="x86_64-apple-darwin",
    ),
    Platform(
        tag="linux",
        label="Linux (x64)",
        runner="ubuntu-22.04",
        system_packages=(
            "libwebkit2gtk-4.1-dev",
            "libappindicator3-dev",
            "librsvg2-dev",
            "patchelf",
        ),
    ),
    Platform(tag="windows", label="Windows (x64)", runner="windows-latest"),
)

SIGNING_METHODS: tuple[SigningMethod, ...] = (
    SigningMethod(
        tag="macos",
        label="macOS (Apple Developer certificate)",
        comment="macOS code signing",
        secrets=(
            "APPLE_CERTIFICATE",
            "APPLE_CERTIFICATE_PASSWORD",
            "APPLE_SIGNING_IDENTITY",
            "APPLE_ID",
            "APPLE_PASSWORD",
            "APPLE_TEAM_ID",
        ),
    ),
    SigningMethod(
        tag="windows",
        label="Windows (Tauri updater signing)",
        comment="Windows/Tauri updater signing",
        secrets=("TAURI_SIGNING_PRIVATE_KEY", "TAURI_SIGNING_PRIVATE_KEY_PASSWORD"),
    ),
)

# Ordered by popularity, then alphabetical.
AGENTS: tuple[str, ...] = (
    "claude",
    "cursor",
    "copilot",
    "opencode",
    "windsurf",
    "cline",
    "zed",
    "aider",
    "amp",
    "codex",
    "gemini-cli",
    "goose",
    "kiro",
    "roo",
    "agentsmd",
    "amazonqcli",
    "antigravity",
    "augmentcode",
    "crush",
    "firebase",
    "firebender",
    "jules",
    "junie",
    "kilocode",
    "openhands",
    "qwen",
    "trae",
    "warp",
)


@dataclass(frozen=True)
class Catalog:
    """Everything the engine knows about the template, passed explicitly."""

    template: TemplateIdentity = field(default_factory=TemplateIdentity)
    platforms: tuple[Platform, ...] = PLATFORMS
    signing_methods: tuple[SigningMethod, ...] = SIGNING_METHODS
    agents: tuple[str, ...] = AGENTS
    default_agents: tuple[str, ...] = ()
    agent_page_size: int = 15

    package_manifest: str = "package.json"
    native_dir: str = "src-tauri"
    shell_manifest: str = "src-tauri/tauri.conf.json"
    native_manifest: str = "src-tauri/Cargo.toml"
    native_entry_point: str = "src-tauri/src/main.rs"
    html_entry: str = "index.html"
    license_file: str = "LICENSE"
    contributing_guide: str = "CONTRIBUTING.md"
    readme: str = "README.md"
    agent_instructions: str = ".ruler/AGENTS.md"
    agent_config: str = ".ruler/ruler.toml"
    publish_workflow: str = ".github/workflows/publish.yml"
    setup_script: str = "scripts/setup.py"
    template_only_files: tuple[str, ...] = (
        "scripts/setup.py",
        ".github/TEMPLATE_README.md",
        "suggestions.md",
    )

    agent_apply_command: tuple[str, ...] = ("bunx", "@intellectronica/ruler", "apply")
    hook_install_command: tuple[str, ...] = ("bunx", "lefthook", "install")
    native_lock_command: tuple[str, ...] = ("cargo", "generate-lockfile")
    package_lock_command: tuple[str, ...] = ("bun", "install")
    commit_message: str = "feat: initial commit"
    dev_command: str = "bun tauri dev"

    @property
    def setup_script_name(self) -> str:
        return PurePosixPath(self.setup_script).name


def default_catalog() -> Catalog:
    """Return the catalog describing the create-tauri-react-app template."""
    return Catalog()
