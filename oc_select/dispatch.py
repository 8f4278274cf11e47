"""Routing of the picker outcome to the matching action."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Protocol

from oc_select.config import PromptConfig
from oc_select.context import RenderContext
from oc_select.models import (
    CommandEntry,
    Entry,
    Group,
    PromptEntry,
    ProviderAction,
    ProviderEntry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptRequest:
    """A configured prompt together with the context it was rendered in."""

    name: str
    config: PromptConfig
    context: RenderContext


class Actions(Protocol):
    def ask(self, template: str, request: PromptRequest) -> None: ...

    def prompt(self, template: str, request: PromptRequest) -> None: ...

    def command(self, name: str) -> None: ...

    def toggle(self) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


class ChoiceDispatcher:
    """Callback handed to a backend; handles exactly one outcome."""

    def __init__(
        self,
        prompts: Mapping[str, PromptConfig],
        context: RenderContext,
        actions: Actions,
    ) -> None:
        self._prompts = prompts
        self._context = context
        self._actions = actions
        self.dispatched = False

    def __call__(self, choice: Entry | None) -> None:
        if self.dispatched:
            raise RuntimeError("Picker outcome already dispatched")
        if isinstance(choice, Group):
            raise TypeError(f"Group {choice.name!r} is not selectable")
        self.dispatched = True

        if choice is None:
            logger.debug("Selection cancelled")
            self._context.resume()
            return

        self._context.clear()
        logger.info("Dispatching %s %r", type(choice).__name__, choice.name)
        if isinstance(choice, PromptEntry):
            self._run_prompt(choice)
        elif isinstance(choice, CommandEntry):
            self._actions.command(choice.name)
        elif isinstance(choice, ProviderEntry):
            self._run_provider(choice.action)
        else:
            raise TypeError(f"Unsupported picker item: {choice!r}")

    def _run_prompt(self, entry: PromptEntry) -> None:
        config = self._prompts[entry.name]
        request = PromptRequest(name=entry.name, config=config, context=self._context)
        if config.ask:
            self._actions.ask(config.prompt, request)
        else:
            self._actions.prompt(config.prompt, request)

    def _run_provider(self, action: ProviderAction) -> None:
        if action is ProviderAction.TOGGLE:
            self._actions.toggle()
        elif action is ProviderAction.START:
            self._actions.start()
        elif action is ProviderAction.STOP:
            self._actions.stop()
        else:
            raise TypeError(f"Unsupported provider action: {action!r}")
