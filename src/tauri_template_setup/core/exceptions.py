"""Exceptions raised by the setup engine."""

from collections.abc import Sequence


class SetupError(Exception):
    """Base class for errors raised while personalizing a template."""


class CommandError(SetupError):
    """An external command exited non-zero or could not be started.

    Attributes:
        cmd: The command and its arguments.
        returncode: Exit status, or None when the process never started.
        stderr: Captured standard error, if any.
    """

    def __init__(
        self, cmd: Sequence[str], returncode: int | None, stderr: str | None = None
    ) -> None:
        self.cmd = tuple(cmd)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        detail = f"exit status {returncode}" if returncode is not None else "could not start"
        message = f"'{' '.join(self.cmd)}' failed ({detail})"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)
