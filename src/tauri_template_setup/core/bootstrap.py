"""Best-effort environment bootstrap: git, agent tooling, hooks, lockfiles, commit.

Each step returns a ``StepResult`` instead of raising. ``run_steps`` runs a
fixed list, reports every outcome, and turns anything that still escapes a
step into a failed result, so one broken tool never stops the run.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from tauri_template_setup.core.catalog import Catalog
from tauri_template_setup.core.commands import Runner, succeeds
from tauri_template_setup.core.exceptions import CommandError
from tauri_template_setup.core.rewrite import agent_config_rule
from tauri_template_setup.utils.console import StatusConsole
from tauri_template_setup.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one bootstrap step.

    Attributes:
        name: Short step identifier.
        ok: Whether the step achieved its goal (skips count as ok).
        message: Line shown to the user.
        fallback: Manual command to run when the step failed.
        skipped: The step decided there was nothing to do.
    """

    name: str
    ok: bool
    message: str
    fallback: str | None = None
    skipped: bool = False


Step = tuple[str, Callable[[], StepResult]]


def run_steps(steps: Sequence[Step], status: StatusConsole) -> list[StepResult]:
    """Run steps in order, reporting each outcome and never raising.

    Args:
        steps: (name, callable) pairs.
        status: Where outcomes are printed.

    Returns:
        One result per step, in order.
    """
    results: list[StepResult] = []
    for name, step in steps:
        try:
            result = step()
        except Exception as e:  # noqa: BLE001
            logger.exception("Bootstrap step crashed", step=name)
            result = StepResult(name, ok=False, message=f"{name} failed: {e}")

        if result.skipped:
            status.info(result.message)
        elif result.ok:
            status.success(result.message)
        elif result.fallback:
            status.warn(f"{result.message}. Run '{result.fallback}' manually.")
        else:
            status.warn(result.message)
        results.append(result)
    return results


class Bootstrapper:
    """External side effects of setup, each independently fault tolerant."""

    def __init__(
        self, root: Path, catalog: Catalog, runner: Runner, status: StatusConsole
    ) -> None:
        self.root = root
        self.catalog = catalog
        self.runner = runner
        self.status = status

    def _run(self, cmd: Sequence[str], *, cwd: Path | None = None, capture: bool = True) -> str:
        return self.runner.run(cmd, cwd=cwd or self.root, capture=capture)

    def has_git(self) -> bool:
        return succeeds(self.runner, ["git", "rev-parse", "--is-inside-work-tree"], cwd=self.root)

    def init_git(self) -> StepResult:
        if self.has_git():
            return StepResult(
                "git-init",
                ok=True,
                skipped=True,
                message="Already inside a git repository, skipping git init",
            )
        try:
            self._run(["git", "init"])
        except CommandError as e:
            logger.info("git init failed", error=str(e))
            return StepResult(
                "git-init",
                ok=False,
                message="Failed to initialize git repository",
                fallback="git init",
            )
        return StepResult("git-init", ok=True, message="Initialized git repository")

    def write_agent_config(self, agents: Sequence[str]) -> StepResult:
        """Write the selected agents into the routing config, if the config exists."""
        config = self.catalog.agent_config
        if not agents:
            return StepResult(
                "agent-config",
                ok=True,
                skipped=True,
                message="No agents selected, skipping ruler configuration",
            )
        path = self.root / config
        if not path.exists():
            return StepResult(
                "agent-config",
                ok=False,
                message=f"{Path(config).name} not found, skipping ruler configuration",
            )
        rule = agent_config_rule(agents, self.catalog)
        try:
            content = path.read_text(encoding="utf-8")
            if not rule.pattern.search(content):
                return StepResult(
                    "agent-config", ok=False, message=f"No default_agents entry in {config}"
                )
            path.write_text(rule.apply(content), encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.info("Agent config update failed", error=str(e))
            return StepResult("agent-config", ok=False, message=f"Failed to update {config}")
        return StepResult("agent-config", ok=True, message=f"Updated {config} with selected agents")

    def apply_agent_config(self, agents: Sequence[str]) -> StepResult:
        command = " ".join(self.catalog.agent_apply_command)
        if not agents:
            return StepResult(
                "agent-apply", ok=True, skipped=True, message="No agents selected, nothing to apply"
            )
        self.status.info("Applying ruler configurations...")
        try:
            self._run(self.catalog.agent_apply_command, capture=False)
        except CommandError as e:
            logger.info("Agent apply failed", error=str(e))
            return StepResult(
                "agent-apply",
                ok=False,
                message="Failed to apply ruler configurations",
                fallback=command,
            )
        return StepResult("agent-apply", ok=True, message="Applied ruler configurations")

    def install_git_hooks(self) -> StepResult:
        command = " ".join(self.catalog.hook_install_command)
        if not self.has_git():
            return StepResult(
                "git-hooks",
                ok=True,
                skipped=True,
                message="No git repository, skipping git hook installation",
            )
        self.status.info("Installing Lefthook git hooks...")
        try:
            self._run(self.catalog.hook_install_command, capture=False)
        except CommandError as e:
            logger.info("Hook install failed", error=str(e))
            return StepResult(
                "git-hooks", ok=False, message="Failed to install Lefthook", fallback=command
            )
        return StepResult("git-hooks", ok=True, message="Installed Lefthook git hooks")

    def regenerate_native_lockfile(self) -> StepResult:
        native_dir = self.catalog.native_dir
        command = f"{' '.join(self.catalog.native_lock_command)} (in {native_dir}/)"
        self.status.info("Regenerating Cargo.lock...")
        try:
            self._run(self.catalog.native_lock_command, cwd=self.root / native_dir)
        except CommandError as e:
            logger.info("Lockfile regeneration failed", error=str(e))
            return StepResult(
                "native-lock", ok=False, message="Failed to regenerate Cargo.lock", fallback=command
            )
        return StepResult("native-lock", ok=True, message="Regenerated Cargo.lock")

    def update_package_lockfile(self) -> StepResult:
        command = " ".join(self.catalog.package_lock_command)
        self.status.info("Updating bun.lock...")
        try:
            self._run(self.catalog.package_lock_command)
        except CommandError as e:
            logger.info("Package install failed", error=str(e))
            return StepResult(
                "package-lock", ok=False, message="Failed to update bun.lock", fallback=command
            )
        return StepResult("package-lock", ok=True, message="Updated bun.lock")

    def create_initial_commit(self) -> StepResult:
        """Stage everything and commit, amending HEAD when a commit already exists.

        Hooks are bypassed with --no-verify so lint hooks cannot block the
        first commit of a freshly generated project.
        """
        message = self.catalog.commit_message
        self.status.info("Creating initial commit...")
        try:
            self._run(["git", "add", "-A"])
            has_head = succeeds(self.runner, ["git", "rev-parse", "HEAD"], cwd=self.root)
            commit = ["git", "commit"]
            if has_head:
                commit.append("--amend")
            commit.extend(["--no-verify", "-m", message])
            self._run(commit)
        except CommandError as e:
            logger.info("Initial commit failed", error=str(e))
            return StepResult(
                "commit",
                ok=False,
                message="Failed to create initial commit",
                fallback=f'git add -A && git commit -m "{message}"',
            )
        return StepResult("commit", ok=True, message="Created initial commit")
