"""Template personalization engine."""

from tauri_template_setup.core.answers import AnswerRecord, to_kebab_case, to_snake_case
from tauri_template_setup.core.catalog import Catalog, default_catalog
from tauri_template_setup.core.config import Settings
from tauri_template_setup.core.context import RepositoryState, detect
from tauri_template_setup.core.exceptions import CommandError, SetupError
from tauri_template_setup.core.setup import SetupReport, run_setup
from tauri_template_setup.core.workflow import generate_publish_workflow

__all__ = [
    "AnswerRecord",
    "Catalog",
    "CommandError",
    "RepositoryState",
    "Settings",
    "SetupError",
    "SetupReport",
    "default_catalog",
    "detect",
    "generate_publish_workflow",
    "run_setup",
    "to_kebab_case",
    "to_snake_case",
]
