"""Status lines shown to the person running setup.

Every step reports through one of the glyph helpers so a run never fails
silently: green check for success, cyan info mark, yellow warning, red cross
for errors.
"""

from rich.console import Console
from rich.text import Text

RULE_WIDTH = 33


class StatusConsole:
    """Thin wrapper around a rich Console printing glyph-prefixed lines."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def _glyph(self, glyph: str, style: str, message: str) -> None:
        self.console.print(Text.assemble((glyph, style), " ", message), soft_wrap=True)

    def line(self, message: str = "") -> None:
        self.console.print(Text(message), soft_wrap=True)

    def success(self, message: str) -> None:
        self._glyph("✓", "green", message)

    def info(self, message: str) -> None:
        self._glyph("ℹ", "cyan", message)

    def warn(self, message: str) -> None:
        self._glyph("⚠", "yellow", message)

    def error(self, message: str) -> None:
        self._glyph("✗", "red", message)

    def heading(self, title: str) -> None:
        """Print a cyan title underlined by a dim rule, padded by blank lines."""
        self.line()
        self.console.print(Text(title, style="cyan"), soft_wrap=True)
        self.console.print(Text("─" * RULE_WIDTH, style="dim"), soft_wrap=True)
        self.line()
