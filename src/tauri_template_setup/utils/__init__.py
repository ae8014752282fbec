"""Utility modules for logging and console status output."""

from tauri_template_setup.utils.console import StatusConsole
from tauri_template_setup.utils.logging import get_logger, setup_logging

__all__ = [
    "StatusConsole",
    "get_logger",
    "setup_logging",
]
