"""Top-level driver for a setup run.

Stages run strictly in sequence: detect, collect, rewrite, generate the
workflow, set up git and agent tooling, strip the setup hooks, regenerate
the lockfiles, delete template files, commit. Only the detector can end
the run early, and it does so silently.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path

from tauri_template_setup.core.answers import AnswerRecord
from tauri_template_setup.core.bootstrap import Bootstrapper, StepResult, run_steps
from tauri_template_setup.core.catalog import Catalog, default_catalog
from tauri_template_setup.core.cleanup import cleanup_template, strip_setup_hooks
from tauri_template_setup.core.commands import CommandRunner, Runner
from tauri_template_setup.core.context import RepositoryState, detect
from tauri_template_setup.core.prompts import AnswerCollector, Prompter
from tauri_template_setup.core.rewrite import apply_rules, personalization_rules
from tauri_template_setup.core.workflow import write_publish_workflow
from tauri_template_setup.utils.console import StatusConsole
from tauri_template_setup.utils.logging import get_logger, log_performance

logger = get_logger(__name__)


@dataclass
class SetupReport:
    """What a setup run did."""

    state: RepositoryState
    answers: AnswerRecord | None = None
    rewritten: dict[str, bool] = field(default_factory=dict)
    hooks_stripped: bool = False
    workflow_written: bool = False
    steps: list[StepResult] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    @property
    def ran(self) -> bool:
        return self.state is RepositoryState.FRESH_COPY

    @property
    def failures(self) -> list[StepResult]:
        return [step for step in self.steps if not step.ok]


def run_setup(
    root: Path,
    *,
    prompter: Prompter,
    runner: Runner | None = None,
    status: StatusConsole | None = None,
    catalog: Catalog | None = None,
    force: bool = False,
) -> SetupReport:
    """Personalize the template checkout at ``root``.

    Args:
        root: Project root (the copied template).
        prompter: Interactive front end for the questions.
        runner: Command runner for git and tooling. Defaults to subprocess.
        status: Status line printer.
        catalog: Template description. Defaults to the bundled catalog.
        force: Skip the template-repository heuristic.

    Returns:
        A report of the run. Template checkouts and configured projects
        return immediately with no output.
    """
    catalog = catalog or default_catalog()
    runner = runner or CommandRunner()
    status = status or StatusConsole()

    state = detect(root, catalog, runner, force=force)
    report = SetupReport(state=state)
    if state is not RepositoryState.FRESH_COPY:
        logger.info("Skipping setup", state=state.value, root=str(root))
        return report

    started = time.perf_counter()
    status.heading("🚀 Tauri + React Template Setup")

    answers = AnswerCollector(catalog, prompter, status).collect(root.name)
    report.answers = answers

    status.line()
    status.info("Updating project files...")
    status.line()
    report.rewritten = apply_rules(root, personalization_rules(answers, catalog), status)

    if answers.target_platforms:
        report.workflow_written = write_publish_workflow(
            root, answers.target_platforms, answers.signing_methods, catalog, status
        )
    else:
        status.warn("No platforms selected, keeping default publish workflow")

    status.line()
    status.info("Setting up development environment...")
    status.line()
    bootstrapper = Bootstrapper(root, catalog, runner, status)
    agents = answers.selected_tools
    report.steps = run_steps(
        [
            ("git-init", bootstrapper.init_git),
            ("agent-config", lambda: bootstrapper.write_agent_config(agents)),
            ("agent-apply", lambda: bootstrapper.apply_agent_config(agents)),
            ("git-hooks", bootstrapper.install_git_hooks),
        ],
        status,
    )

    # The lockfiles must be built from the final manifest.
    report.hooks_stripped = strip_setup_hooks(root, catalog, status)
    report.steps += run_steps(
        [
            ("native-lock", bootstrapper.regenerate_native_lockfile),
            ("package-lock", bootstrapper.update_package_lockfile),
        ],
        status,
    )

    status.line()
    status.info("Cleaning up template files...")
    status.line()
    report.deleted = cleanup_template(root, catalog, status)

    report.steps += run_steps([("commit", bootstrapper.create_initial_commit)], status)

    log_performance(
        logger,
        operation="template_setup",
        duration_ms=(time.perf_counter() - started) * 1000,
        success=not report.failures,
        failed_steps=[step.name for step in report.failures],
    )

    status.line()
    status.success("Setup complete!")
    status.line()
    status.line("Next steps:")
    status.line(f"  1. {catalog.dev_command}")
    status.line()
    return report
