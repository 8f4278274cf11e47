"""Shared fakes for picker tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from oc_select.config import PromptConfig, SelectionConfig, SectionsConfig, Settings
from oc_select.context import RenderContext
from oc_select.dispatch import PromptRequest
from oc_select.models import Agent, CustomCommand


@dataclass
class FakeSources:
    """Pipeline sources that record every call."""

    agents: list[Agent] = field(default_factory=list)
    commands: list[CustomCommand] = field(default_factory=list)
    fail_on: str | None = None
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)
    handle: Any = "handle"

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name:
            raise self.error or RuntimeError(name)

    async def get_connection(self) -> Any:
        self._maybe_fail("connection")
        return self.handle

    async def fetch_agents(self, handle: Any) -> list[Agent]:
        assert handle == self.handle
        self._maybe_fail("agents")
        return list(self.agents)

    async def fetch_commands(self, handle: Any) -> list[CustomCommand]:
        assert handle == self.handle
        self._maybe_fail("commands")
        return list(self.commands)


@dataclass
class RecordingActions:
    calls: list[tuple] = field(default_factory=list)

    def ask(self, template: str, request: PromptRequest) -> None:
        self.calls.append(("ask", template, request.name))

    def prompt(self, template: str, request: PromptRequest) -> None:
        self.calls.append(("prompt", template, request.name))

    def command(self, name: str) -> None:
        self.calls.append(("command", name))

    def toggle(self) -> None:
        self.calls.append(("toggle",))

    def start(self) -> None:
        self.calls.append(("start",))

    def stop(self) -> None:
        self.calls.append(("stop",))


@pytest.fixture
def sources() -> FakeSources:
    return FakeSources(
        agents=[
            Agent(name="build", mode="primary"),
            Agent(name="reviewer", mode="subagent"),
        ],
        commands=[CustomCommand(name="deploy", description="Deploy the app")],
    )


@pytest.fixture
def actions() -> RecordingActions:
    return RecordingActions()


@pytest.fixture
def context() -> RenderContext:
    return RenderContext({"this": "main.py:10"})


@pytest.fixture
def prompts() -> dict[str, PromptConfig]:
    return {
        "explain": PromptConfig(prompt="Explain @this", submit=True),
        "ask": PromptConfig(prompt="", ask=True, submit=True),
        "implement": PromptConfig(prompt="Implement @this with @reviewer"),
    }


@pytest.fixture
def make_selection() -> Callable[..., SelectionConfig]:
    def _make(**sections: Any) -> SelectionConfig:
        return SelectionConfig(sections=SectionsConfig(**sections))

    return _make


@pytest.fixture
def settings(prompts: dict[str, PromptConfig]) -> Settings:
    return Settings(
        prompts=prompts,
        provider={"cmd": ["opencode"], "state_dir": "/tmp/ocs-test"},
    )
