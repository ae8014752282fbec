"""End-to-end tests for a full setup run against the fixture template."""

import json
import shutil
from pathlib import Path

import pytest
from conftest import TEMPLATE_DIR, FakeRunner, ScriptedPrompter, output_of

from tauri_template_setup.core import prompts
from tauri_template_setup.core.catalog import Catalog
from tauri_template_setup.core.context import RepositoryState
from tauri_template_setup.core.setup import run_setup
from tauri_template_setup.core.workflow import generate_publish_workflow
from tauri_template_setup.utils.console import StatusConsole

DEMO_ANSWERS = {
    prompts.PRODUCT_NAME: "Demo App",
    prompts.OWNER_ACCOUNT: "acme",
}
DEMO_CHOICES = {
    prompts.PLATFORMS: ["macos-arm64", "linux"],
    prompts.SIGNING: [],
    prompts.AGENTS: ["claude"],
}


def snapshot(root: Path) -> dict[Path, bytes]:
    return {p: p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


class TestFullRun:
    """Test the documented demo-app scenario."""

    @pytest.mark.integration
    def test_demo_app(
        self, project_dir: Path, catalog: Catalog, runner: FakeRunner, status: StatusConsole
    ) -> None:
        """Verify a fresh copy is personalized, bootstrapped and cleaned up."""
        report = run_setup(
            project_dir,
            prompter=ScriptedPrompter(DEMO_ANSWERS, DEMO_CHOICES),
            runner=runner,
            status=status,
            catalog=catalog,
        )

        assert report.ran is True
        assert report.state is RepositoryState.FRESH_COPY
        assert report.failures == []

        shell = json.loads((project_dir / "src-tauri" / "tauri.conf.json").read_text())
        assert shell["productName"] == "Demo App"
        assert shell["identifier"] == "com.acme.demo-app"

        workflow = (project_dir / ".github" / "workflows" / "publish.yml").read_text()
        assert workflow == generate_publish_workflow(["macos-arm64", "linux"], [], catalog)

        ruler = (project_dir / ".ruler" / "ruler.toml").read_text()
        assert 'default_agents = ["claude"]' in ruler

        package = json.loads((project_dir / "package.json").read_text())
        assert package["name"] == "demo-app"
        assert "postinstall" not in package["scripts"]
        assert "bin" not in package

        for relative in catalog.template_only_files:
            assert not (project_dir / relative).exists()
        assert sorted(report.deleted) == sorted(catalog.template_only_files)

        out = output_of(status)
        assert "🚀 Tauri + React Template Setup" in out
        assert "✓ Setup complete!" in out
        assert "  1. bun tauri dev" in out

    @pytest.mark.integration
    def test_step_order(
        self, project_dir: Path, catalog: Catalog, runner: FakeRunner, status: StatusConsole
    ) -> None:
        """Verify tooling runs after rewrites and the commit comes last."""
        report = run_setup(
            project_dir,
            prompter=ScriptedPrompter(DEMO_ANSWERS, DEMO_CHOICES),
            runner=runner,
            status=status,
            catalog=catalog,
        )

        assert [step.name for step in report.steps] == [
            "git-init",
            "agent-config",
            "agent-apply",
            "git-hooks",
            "native-lock",
            "package-lock",
            "commit",
        ]
        tools = [cmd for cmd in runner.commands if cmd[0] != "git"]
        assert tools == [
            ("bunx", "@intellectronica/ruler", "apply"),
            ("bunx", "lefthook", "install"),
            ("cargo", "generate-lockfile"),
            ("bun", "install"),
        ]
        assert runner.commands[-1][:2] == ("git", "commit")

    @pytest.mark.integration
    def test_install_sees_stripped_manifest(
        self, project_dir: Path, catalog: Catalog, status: StatusConsole
    ) -> None:
        """Verify bun install never sees the hook that would start setup again."""
        seen: list[dict] = []

        class ManifestRunner(FakeRunner):
            def run(self, cmd, *, cwd, capture=True):  # type: ignore[no-untyped-def]
                if tuple(cmd) == ("bun", "install"):
                    seen.append(json.loads((cwd / "package.json").read_text()))
                return super().run(cmd, cwd=cwd, capture=capture)

        report = run_setup(
            project_dir,
            prompter=ScriptedPrompter(DEMO_ANSWERS, DEMO_CHOICES),
            runner=ManifestRunner(),
            status=status,
            catalog=catalog,
        )

        assert report.hooks_stripped is True
        (package,) = seen
        assert "postinstall" not in package["scripts"]
        assert "setup" not in package["scripts"]
        assert "bin" not in package

    @pytest.mark.integration
    def test_second_run_is_skipped(
        self, project_dir: Path, catalog: Catalog, runner: FakeRunner, status: StatusConsole
    ) -> None:
        """Verify a personalized project is left alone on the next install."""
        run_setup(
            project_dir,
            prompter=ScriptedPrompter(DEMO_ANSWERS, DEMO_CHOICES),
            runner=runner,
            status=status,
            catalog=catalog,
        )
        before = snapshot(project_dir)
        prompter = ScriptedPrompter()

        report = run_setup(
            project_dir, prompter=prompter, runner=FakeRunner(), status=status, catalog=catalog
        )

        assert report.state is RepositoryState.ALREADY_CONFIGURED
        assert prompter.asked == []
        assert snapshot(project_dir) == before


class TestSkippedRuns:
    """Test runs the detector stops early."""

    @pytest.mark.integration
    def test_template_repository(
        self, tmp_path: Path, catalog: Catalog, status: StatusConsole
    ) -> None:
        """Verify the template's own checkout is never modified."""
        root = tmp_path / "create-tauri-react-app"
        shutil.copytree(TEMPLATE_DIR, root)
        before = snapshot(root)
        runner = FakeRunner({("git", "rev-parse", "--show-toplevel"): str(root)})
        prompter = ScriptedPrompter()

        report = run_setup(root, prompter=prompter, runner=runner, status=status, catalog=catalog)

        assert report.state is RepositoryState.TEMPLATE_SOURCE
        assert report.ran is False
        assert prompter.asked == []
        assert snapshot(root) == before
        assert output_of(status) == ""

    @pytest.mark.integration
    def test_force_runs_in_template_named_directory(
        self, tmp_path: Path, catalog: Catalog, status: StatusConsole
    ) -> None:
        """Verify force personalizes even when the directory name matches."""
        root = tmp_path / "create-tauri-react-app"
        shutil.copytree(TEMPLATE_DIR, root)
        runner = FakeRunner({("git", "rev-parse", "--show-toplevel"): str(root)})

        report = run_setup(
            root,
            prompter=ScriptedPrompter(),
            runner=runner,
            status=status,
            catalog=catalog,
            force=True,
        )

        assert report.ran is True
        assert report.answers is not None
        assert report.answers.project_name == "my-app"


class TestDegradedRuns:
    """Test runs where parts of the environment are missing."""

    @pytest.mark.integration
    def test_no_platforms_keeps_workflow(
        self, project_dir: Path, catalog: Catalog, runner: FakeRunner, status: StatusConsole
    ) -> None:
        """Verify an empty platform selection leaves the workflow untouched."""
        path = project_dir / ".github" / "workflows" / "publish.yml"
        before = path.read_bytes()

        report = run_setup(
            project_dir,
            prompter=ScriptedPrompter(checkbox={prompts.PLATFORMS: []}),
            runner=runner,
            status=status,
            catalog=catalog,
        )

        assert report.workflow_written is False
        assert path.read_bytes() == before
        assert "⚠ No platforms selected, keeping default publish workflow" in output_of(status)

    @pytest.mark.integration
    def test_missing_tools_still_clean_up(
        self, project_dir: Path, catalog: Catalog, status: StatusConsole
    ) -> None:
        """Verify every tool failing still completes with manual instructions."""
        runner = FakeRunner(failures=[("git",), ("bun",), ("bunx",), ("cargo",)])

        report = run_setup(
            project_dir,
            prompter=ScriptedPrompter(DEMO_ANSWERS, DEMO_CHOICES),
            runner=runner,
            status=status,
            catalog=catalog,
        )

        failed = {step.name for step in report.failures}
        assert failed == {"git-init", "agent-apply", "native-lock", "package-lock", "commit"}
        assert not (project_dir / "scripts" / "setup.py").exists()

        out = output_of(status)
        assert "Run 'git init' manually." in out
        assert "Run 'cargo generate-lockfile (in src-tauri/)' manually." in out
        assert "✓ Setup complete!" in out

    @pytest.mark.integration
    def test_missing_files_are_reported(
        self, project_dir: Path, catalog: Catalog, runner: FakeRunner, status: StatusConsole
    ) -> None:
        """Verify missing rewrite targets do not stop the run."""
        (project_dir / "index.html").unlink()
        (project_dir / "suggestions.md").unlink()

        report = run_setup(
            project_dir,
            prompter=ScriptedPrompter(),
            runner=runner,
            status=status,
            catalog=catalog,
        )

        assert report.rewritten["index.html"] is False
        assert "suggestions.md" not in report.deleted
        assert "✗ File not found: index.html" in output_of(status)
