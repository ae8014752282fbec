"""Interactive prompts and the answer collector.

Free-text questions go through click; multi-select questions use a rich
``Live`` checkbox driven by readchar key presses. The checkbox model lives
in ``CheckboxState`` so navigation rules can be exercised without a
terminal.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

import click
import readchar
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tauri_template_setup.core.answers import AnswerRecord, to_kebab_case
from tauri_template_setup.core.catalog import Catalog
from tauri_template_setup.utils.console import StatusConsole
from tauri_template_setup.utils.logging import get_logger

logger = get_logger(__name__)

PROJECT_NAME = "Project name"
PRODUCT_NAME = "Product name (display name)"
OWNER_ACCOUNT = "GitHub username or organization"
BUNDLE_IDENTIFIER = "Bundle identifier"
AUTHOR = "Author name"
DESCRIPTION = "Description"
PLATFORMS = "Select target platforms for releases"
SIGNING = "Enable code signing (requires GitHub secrets setup)"
AGENTS = "Select AI agents to configure"


@dataclass(frozen=True)
class Choice:
    """One entry in a multi-select prompt."""

    label: str
    value: str
    checked: bool = False


class Prompter(Protocol):
    """What the collector needs from an interactive front end."""

    def text(self, message: str, default: str = "") -> str: ...

    def checkbox(
        self,
        message: str,
        choices: Sequence[Choice],
        *,
        page_size: int | None = None,
        loop: bool = True,
    ) -> list[str]: ...


@dataclass
class CheckboxState:
    """Cursor, paging and selection for a multi-select list.

    Attributes:
        choices: Entries in display order.
        page_size: Number of rows visible at once.
        loop: Whether moving past either end wraps around.
        cursor: Index of the highlighted entry.
        selected: Values currently checked.
    """

    choices: Sequence[Choice]
    page_size: int = 7
    loop: bool = True
    cursor: int = 0
    selected: set[str] = field(default_factory=set)

    @classmethod
    def from_choices(
        cls, choices: Sequence[Choice], page_size: int | None = None, loop: bool = True
    ) -> "CheckboxState":
        size = page_size if page_size and page_size > 0 else max(len(choices), 1)
        return cls(
            choices=choices,
            page_size=size,
            loop=loop,
            selected={choice.value for choice in choices if choice.checked},
        )

    def move(self, delta: int) -> None:
        count = len(self.choices)
        if count == 0:
            return
        if self.loop:
            self.cursor = (self.cursor + delta) % count
        else:
            self.cursor = min(max(self.cursor + delta, 0), count - 1)

    def page_down(self) -> None:
        """Jump one page forward; from the last entry, wrap to the first when looping."""
        last = len(self.choices) - 1
        if last < 0:
            return
        if self.cursor == last and self.loop:
            self.cursor = 0
        else:
            self.cursor = min(self.cursor + self.page_size, last)

    def page_up(self) -> None:
        last = len(self.choices) - 1
        if last < 0:
            return
        if self.cursor == 0 and self.loop:
            self.cursor = last
        else:
            self.cursor = max(self.cursor - self.page_size, 0)

    def toggle(self) -> None:
        if not self.choices:
            return
        value = self.choices[self.cursor].value
        if value in self.selected:
            self.selected.discard(value)
        else:
            self.selected.add(value)

    def toggle_all(self) -> None:
        values = {choice.value for choice in self.choices}
        self.selected = set() if values <= self.selected else values

    def window(self) -> range:
        """Indices of the rows visible around the cursor."""
        count = len(self.choices)
        if count <= self.page_size:
            return range(count)
        start = min(max(self.cursor - self.page_size // 2, 0), count - self.page_size)
        return range(start, start + self.page_size)

    def values(self) -> list[str]:
        """Checked values in display order."""
        return [choice.value for choice in self.choices if choice.value in self.selected]


class ConsolePrompter:
    """Terminal front end: click for text, rich + readchar for checkboxes."""

    HINT = "↑/↓ move · PgUp/PgDn page · space toggle · a toggle all · enter confirm"

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def text(self, message: str, default: str = "") -> str:
        answer: str = click.prompt(message, default=default, show_default=bool(default))
        return answer

    def checkbox(
        self,
        message: str,
        choices: Sequence[Choice],
        *,
        page_size: int | None = None,
        loop: bool = True,
    ) -> list[str]:
        state = CheckboxState.from_choices(choices, page_size=page_size, loop=loop)
        with Live(
            self._render(message, state),
            console=self.console,
            transient=True,
            auto_refresh=False,
        ) as live:
            while True:
                key = readchar.readkey()
                if key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF):
                    break
                if key == readchar.key.CTRL_C:
                    raise KeyboardInterrupt
                self._handle_key(state, key)
                live.update(self._render(message, state), refresh=True)

        picked = state.values()
        summary = ", ".join(c.label for c in choices if c.value in picked) or "none"
        self.console.print(Text.assemble(("? ", "green"), message, " ", (summary, "cyan")))
        return picked

    @staticmethod
    def _handle_key(state: CheckboxState, key: str) -> None:
        if key in (readchar.key.UP, "k"):
            state.move(-1)
        elif key in (readchar.key.DOWN, "j"):
            state.move(1)
        elif key == readchar.key.PAGE_UP:
            state.page_up()
        elif key == readchar.key.PAGE_DOWN:
            state.page_down()
        elif key == readchar.key.SPACE:
            state.toggle()
        elif key == "a":
            state.toggle_all()

    def _render(self, message: str, state: CheckboxState) -> Panel:
        table = Table.grid(padding=(0, 1))
        table.add_column(width=1)
        table.add_column(width=3)
        table.add_column()
        for index in state.window():
            choice = state.choices[index]
            pointer = "❯" if index == state.cursor else " "
            mark = "[x]" if choice.value in state.selected else "[ ]"
            style = "cyan" if index == state.cursor else "white"
            table.add_row(
                Text(pointer, style="cyan"),
                Text(mark, style=style),
                Text(choice.label, style=style),
            )
        if len(state.choices) > state.page_size:
            table.add_row("", "", Text(f"({state.cursor + 1}/{len(state.choices)})", style="dim"))
        return Panel(
            Group(table, Text(self.HINT, style="dim")),
            title=Text(message, style="bold"),
            title_align="left",
            border_style="cyan",
        )


class AnswerCollector:
    """Asks the setup questions in order and builds the answer record.

    Input is accepted as typed: there is no validation and no re-prompt.
    """

    def __init__(
        self,
        catalog: Catalog,
        prompter: Prompter,
        status: StatusConsole | None = None,
    ) -> None:
        self.catalog = catalog
        self.prompter = prompter
        self.status = status

    def default_project_name(self, directory_name: str) -> str:
        """Default to the directory name unless it is the template's own name."""
        template = self.catalog.template
        if not directory_name or directory_name == template.name:
            return template.fallback_project_name
        return directory_name

    def collect(self, directory_name: str) -> AnswerRecord:
        """Run every prompt and return the answers.

        Args:
            directory_name: Base name of the project directory, used as the
                default project name.

        Returns:
            The populated answer record.
        """
        template = self.catalog.template
        ask = self.prompter.text

        project_name = to_kebab_case(ask(PROJECT_NAME, self.default_project_name(directory_name)))
        product_name = ask(PRODUCT_NAME, project_name)
        owner = ask(OWNER_ACCOUNT, template.default_owner)
        identifier = ask(BUNDLE_IDENTIFIER, f"com.{owner}.{project_name}")
        author = ask(AUTHOR, "")
        description = ask(DESCRIPTION, template.default_description)

        if self.status is not None:
            self.status.heading("Build Configuration")

        platforms = self.prompter.checkbox(
            PLATFORMS,
            [Choice(p.label, p.tag, checked=True) for p in self.catalog.platforms],
        )
        signing = self.prompter.checkbox(
            SIGNING,
            [Choice(m.label, m.tag) for m in self.catalog.signing_methods],
        )
        agents = self.prompter.checkbox(
            AGENTS,
            [
                Choice(agent, agent, checked=agent in self.catalog.default_agents)
                for agent in self.catalog.agents
            ],
            page_size=self.catalog.agent_page_size,
            loop=True,
        )

        answers = AnswerRecord(
            project_name=project_name,
            product_name=product_name,
            owner_account=owner,
            bundle_identifier=identifier,
            author=author.strip(),
            description=description,
            target_platforms=tuple(platforms),
            signing_methods=tuple(signing),
            selected_tools=tuple(agents),
        )
        logger.debug(
            "Collected answers",
            project=answers.project_name,
            platforms=answers.target_platforms,
            signing=answers.signing_methods,
            agents=len(answers.selected_tools),
        )
        return answers
