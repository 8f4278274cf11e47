"""Line-based console picker, always available."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from oc_select.models import Entry, Group, SelectableItem, wants_followup
from oc_select.tui.core.protocols import Backend, OnChoice

logger = logging.getLogger(__name__)

NAME_COLUMN = 18
DIVIDER_WIDTH = 80
CANCEL_ANSWERS = {"", "q", "quit"}


def format_console_row(item: SelectableItem, total: int) -> str:
    """Format one row; the indent keeps text aligned under ``N: `` prefixes."""
    indent = " " * max(len(str(total)) - len(str(item.index)), 0)
    if isinstance(item, Group):
        divider = "—" * ((DIVIDER_WIDTH - len(item.name)) // 2)
        return f"{indent}{divider}{item.name}{divider}"
    text = item.summary + ("…" if wants_followup(item) else "")
    padding = " " * max(NAME_COLUMN - len(item.name), 0)
    return f"{indent}[{item.name}]{padding}{text}"


def parse_answer(answer: str, items: Sequence[SelectableItem]) -> Entry | None | bool:
    """Map a typed answer to an entry, ``None`` for cancel or ``False`` if invalid."""
    answer = answer.strip().lower()
    if answer in CANCEL_ANSWERS:
        return None
    try:
        number = int(answer)
    except ValueError:
        return False
    if number < 1 or number > len(items):
        return False
    item = items[number - 1]
    if isinstance(item, Group):
        return False
    return item


class ConsoleBackend(Backend):
    """Numbered list on the console, answered with a number."""

    name = "console"

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def _ask(self, items: Sequence[SelectableItem]) -> Entry | None:
        while True:
            try:
                answer = Prompt.ask(
                    "Select a number (empty to cancel)",
                    console=self._console,
                    default="",
                    show_default=False,
                )
            except (EOFError, KeyboardInterrupt):
                return None
            choice = parse_answer(answer, items)
            if choice is not False:
                return choice
            self._console.print(f"[yellow]Not a selectable entry: {escape(answer)}[/yellow]")

    def choose(
        self,
        items: Sequence[SelectableItem],
        on_choice: OnChoice,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        total = len(items)
        for item in items:
            self._console.print(
                f"{item.index}: {format_console_row(item, total)}",
                markup=False,
                highlight=False,
            )
        choice = self._ask(items) if items else None
        logger.debug("Console picker returned %s", getattr(choice, "name", None))
        on_choice(choice)
