"""Synchronous execution of external commands (git, bun, cargo, bunx)."""

import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from tauri_template_setup.core.exceptions import CommandError
from tauri_template_setup.utils.logging import get_logger

logger = get_logger(__name__)


class Runner(Protocol):
    """Anything that can run a command and return its standard output."""

    def run(self, cmd: Sequence[str], *, cwd: Path, capture: bool = True) -> str: ...


class CommandRunner:
    """Run commands with subprocess, raising CommandError on any failure."""

    def run(self, cmd: Sequence[str], *, cwd: Path, capture: bool = True) -> str:
        """Run a command to completion.

        Args:
            cmd: Command and arguments as list.
            cwd: Working directory.
            capture: Capture stdout/stderr (silent). When False the command
                inherits the terminal so its own output is visible.

        Returns:
            Captured standard output, or an empty string when not captured.

        Raises:
            CommandError: Non-zero exit, missing executable, or OS error.
        """
        args = list(cmd)
        logger.debug("Running command", cmd=args, cwd=str(cwd), capture=capture)
        try:
            result = subprocess.run(  # nosec B603
                args,
                cwd=cwd,
                check=True,
                capture_output=capture,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            raise CommandError(args, e.returncode, e.stderr) from e
        except FileNotFoundError as e:
            # Executable or working directory missing
            raise CommandError(args, None, str(e)) from e
        except OSError as e:
            raise CommandError(args, None, str(e)) from e
        return result.stdout or ""


def succeeds(runner: Runner, cmd: Sequence[str], *, cwd: Path) -> bool:
    """Return True if the command runs cleanly, with its output suppressed."""
    try:
        runner.run(cmd, cwd=cwd)
    except CommandError as e:
        logger.debug("Command failed", cmd=list(cmd), error=str(e))
        return False
    return True
