from __future__ import annotations

from rich.console import Console
from rich.prompt import Prompt

from oc_select.tui.core.protocols import Form


class RichForm(Form):
    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def ask(self, prompt: str, default: str | None = None) -> str | None:
        kwargs = {}
        if default is not None:
            kwargs["default"] = default
        try:
            return Prompt.ask(prompt, console=self._console, **kwargs)
        except (EOFError, KeyboardInterrupt):
            return None
