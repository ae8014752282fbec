"""Diagnostic logging for setup runs, built on structlog and rich.

Status lines for the person running setup go to stdout through
``StatusConsole``. Everything logged here goes to stderr, either through a
rich handler or as JSON lines, so the two never interleave.

Note: this module shadows the stdlib ``logging`` name inside the package.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler
from structlog.stdlib import BoundLogger
from structlog.types import Processor

if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

stderr_console = Console(stderr=True)


def _handler(json_logs: bool, include_timestamp: bool) -> logging.Handler:
    if json_logs:
        return logging.StreamHandler(sys.stderr)
    return RichHandler(
        console=stderr_console,
        rich_tracebacks=True,
        show_time=include_timestamp,
        show_level=True,
        show_path=False,
    )


def _skip_timestamp(
    logger: "WrappedLogger", method_name: str, event_dict: "EventDict"
) -> "EventDict":
    return event_dict


def setup_logging(
    level: str = "WARNING",
    json_logs: bool = False,
    include_timestamp: bool = True,
) -> None:
    """Route stdlib logging and structlog to stderr.

    Safe to call more than once; each call replaces the previous handlers.

    Args:
        level: Level name. Unknown names fall back to WARNING, which keeps an
            interactive run down to its status lines.
        json_logs: Render events as JSON lines instead of rich output.
        include_timestamp: Add an ISO timestamp to every event.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.WARNING),
        handlers=[_handler(json_logs, include_timestamp)],
        force=True,
    )

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso") if include_timestamp else _skip_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        (
            structlog.processors.JSONRenderer()
            if json_logs
            else structlog.dev.ConsoleRenderer(colors=True)
        ),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> BoundLogger:
    """Return the structlog logger for a module, e.g. ``get_logger(__name__)``."""
    result: BoundLogger = structlog.get_logger(name)  # pyright: ignore[reportAssignmentType]
    return result


def log_performance(
    logger: BoundLogger,
    operation: str,
    duration_ms: float,
    success: bool = True,
    **context: object,
) -> None:
    """Emit one ``performance`` event with the duration rounded to 0.01 ms.

    Example:
        >>> log_performance(logger, "template_setup", 812.4, failed_steps=[])
    """
    logger.info(
        "performance",
        operation=operation,
        duration_ms=round(duration_ms, 2),
        success=success,
        **context,
    )
