from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from oc_select.tui.core import theme
from oc_select.tui.core.protocols import Presenter, PresenterSink


class PresenterBase(Presenter):
    """Routes leveled notifications to a sink."""

    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def info(self, message: str) -> None:
        self._sink.emit("info", message)

    def warning(self, message: str) -> None:
        self._sink.emit("warning", message)

    def error(self, message: str) -> None:
        self._sink.emit("error", message)


class _RichPresenterSink(PresenterSink):
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        # Messages can carry [brackets] from config values or server output.
        self._console.print(theme.presenter_message(level, escape(message)))


class RichPresenter(PresenterBase):
    """Notifications on stderr so they never mix with picker output on stdout."""

    def __init__(self, console: Console | None = None) -> None:
        super().__init__(_RichPresenterSink(console or Console(stderr=True)))
