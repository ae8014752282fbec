"""Pytest configuration and shared fixtures for tauri-template-setup tests.

This module provides:
- Pytest markers for test categorization
- A copy of the fixture template tree per test
- A fake command runner and a scripted prompter
- A status console that records its output
"""

import io
import shutil
from collections.abc import Sequence
from pathlib import Path

import pytest
from rich.console import Console

from tauri_template_setup.core.answers import AnswerRecord
from tauri_template_setup.core.catalog import Catalog, default_catalog
from tauri_template_setup.core.exceptions import CommandError
from tauri_template_setup.core.prompts import Choice
from tauri_template_setup.utils.console import StatusConsole

# ============================================================================
# Test Fixture Paths
# ============================================================================

FIXTURES_DIR = Path(__file__).parent / "fixtures"
TEMPLATE_DIR = FIXTURES_DIR / "template"


# ============================================================================
# Pytest Markers
# ============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom pytest markers.

    Args:
        config: Pytest configuration object.
    """
    config.addinivalue_line(
        "markers",
        "unit: Unit tests (fast, isolated, no external dependencies)",
    )
    config.addinivalue_line(
        "markers",
        "integration: Integration tests (moderate speed, may use fixtures)",
    )


# ============================================================================
# Test Doubles
# ============================================================================


class FakeRunner:
    """Records commands instead of running them.

    Args:
        outputs: Stdout to return for exact commands.
        failures: Command prefixes that raise CommandError.
    """

    def __init__(
        self,
        outputs: dict[tuple[str, ...], str] | None = None,
        failures: Sequence[tuple[str, ...]] = (),
    ) -> None:
        self.outputs = dict(outputs or {})
        self.failures = list(failures)
        self.calls: list[tuple[tuple[str, ...], Path, bool]] = []

    def run(self, cmd: Sequence[str], *, cwd: Path, capture: bool = True) -> str:
        key = tuple(cmd)
        self.calls.append((key, cwd, capture))
        for prefix in self.failures:
            if key[: len(prefix)] == prefix:
                raise CommandError(key, 1, "simulated failure")
        return self.outputs.get(key, "")

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [call[0] for call in self.calls]


class ScriptedPrompter:
    """Answers prompts from a script keyed by message prefix.

    Unscripted text prompts take their default; unscripted checkboxes return
    the pre-checked choices.
    """

    def __init__(
        self,
        text: dict[str, str] | None = None,
        checkbox: dict[str, list[str]] | None = None,
    ) -> None:
        self.text_answers = dict(text or {})
        self.checkbox_answers = dict(checkbox or {})
        self.asked: list[tuple[str, object]] = []

    def text(self, message: str, default: str = "") -> str:
        self.asked.append((message, default))
        for prefix, answer in self.text_answers.items():
            if message.startswith(prefix):
                return answer
        return default

    def checkbox(
        self,
        message: str,
        choices: Sequence[Choice],
        *,
        page_size: int | None = None,
        loop: bool = True,
    ) -> list[str]:
        self.asked.append((message, [c.value for c in choices if c.checked]))
        for prefix, answers in self.checkbox_answers.items():
            if message.startswith(prefix):
                return list(answers)
        return [c.value for c in choices if c.checked]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def catalog() -> Catalog:
    """Return the bundled template catalog."""
    return default_catalog()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Return a fresh copy of the fixture template tree named like a new project.

    Args:
        tmp_path: Pytest's built-in tmp_path fixture.
    """
    target = tmp_path / "demo-app"
    shutil.copytree(TEMPLATE_DIR, target)
    return target


@pytest.fixture
def status() -> StatusConsole:
    """Return a status console writing to an in-memory buffer."""
    return StatusConsole(Console(file=io.StringIO(), width=200, color_system=None))


@pytest.fixture
def runner() -> FakeRunner:
    """Return a fake runner where every command succeeds silently."""
    return FakeRunner()


def output_of(status: StatusConsole) -> str:
    """Return everything printed to a status console fixture."""
    file = status.console.file
    assert isinstance(file, io.StringIO)
    return file.getvalue()


def make_answers(**overrides: object) -> AnswerRecord:
    """Return an answer record for the demo-app project, with overrides."""
    values: dict[str, object] = {
        "project_name": "demo-app",
        "product_name": "Demo App",
        "owner_account": "acme",
        "bundle_identifier": "com.acme.demo-app",
        "author": "",
        "description": "A Tauri desktop application",
        "target_platforms": ("macos-arm64", "linux"),
        "signing_methods": (),
        "selected_tools": (),
    }
    values.update(overrides)
    return AnswerRecord(**values)  # type: ignore[arg-type]


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Setup test logging configuration.

    Automatically applied to all tests to ensure consistent logging setup.
    """
    from tauri_template_setup.utils.logging import setup_logging

    setup_logging(level="DEBUG", json_logs=False, include_timestamp=False)
