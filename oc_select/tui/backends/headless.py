"""Non-interactive collaborators for CI runs and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from oc_select.models import SelectableItem, is_selectable
from oc_select.tui.backends.console import format_console_row
from oc_select.tui.components.presenter import PresenterBase
from oc_select.tui.core.protocols import Backend, Form, OnChoice, PresenterSink


@dataclass
class HeadlessBackend(Backend):
    """Picks the first entry named ``choice``; cancels when there is none."""

    choice: str | None = None
    rendered: list[str] = field(default_factory=list)
    name: str = "headless"

    def choose(
        self,
        items: Sequence[SelectableItem],
        on_choice: OnChoice,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        total = len(items)
        self.rendered = [format_console_row(item, total) for item in items]
        picked = None
        if self.choice is not None:
            for item in items:
                if is_selectable(item) and item.name == self.choice:
                    picked = item
                    break
        on_choice(picked)


class _RecordingSink(PresenterSink):
    def __init__(self, messages: list[str]) -> None:
        self._messages = messages

    def emit(self, level: str, message: str) -> None:
        self._messages.append(f"{level.upper()}: {message}")


class HeadlessPresenter(PresenterBase):
    def __init__(self) -> None:
        self.messages: list[str] = []
        super().__init__(_RecordingSink(self.messages))


@dataclass
class HeadlessForm(Form):
    response: str | None = None
    cancel: bool = False
    asked: list[str] = field(default_factory=list)

    def ask(self, prompt: str, default: str | None = None) -> str | None:
        self.asked.append(prompt)
        if self.cancel:
            return None
        if self.response is None:
            return default
        return self.response
