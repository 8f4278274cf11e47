from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence

from oc_select.models import Entry, SelectableItem

OnChoice = Callable[[Entry | None], None]


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...


class Presenter(Protocol):
    """Leveled user notifications (one line each)."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class Form(Protocol):
    def ask(self, prompt: str, default: str | None = None) -> str | None: ...


class Backend(Protocol):
    """Shows the picker list and reports the outcome exactly once."""

    name: str

    def choose(
        self,
        items: Sequence[SelectableItem],
        on_choice: OnChoice,
        options: Mapping[str, Any] | None = None,
    ) -> None: ...
