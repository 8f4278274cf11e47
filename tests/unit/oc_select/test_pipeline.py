"""Tests for the aggregation pipeline."""

from __future__ import annotations

import asyncio

import pytest

from oc_common.errors import RequestError, ServerConnectionError
from oc_select.models import CommandEntry, Group, PromptEntry, ProviderEntry
from oc_select.pipeline import aggregate

pytestmark = pytest.mark.unit_select


def _run(selection, prompts, sources, context):
    return asyncio.run(aggregate(selection, prompts, sources, context))


def _groups(items) -> list[str]:
    return [item.name for item in items if isinstance(item, Group)]


def test_full_aggregation_order_and_indices(
    make_selection, prompts, sources, context
) -> None:
    result = _run(make_selection(commands={"session.new": "New"}), prompts, sources, context)

    assert sources.calls == ["connection", "agents", "commands"]
    assert _groups(result.items) == ["PROMPT", "COMMAND", "PROVIDER"]
    assert [item.index for item in result.items] == list(range(1, len(result.items) + 1))
    assert result.handle == "handle"

    commands = [item.name for item in result.items if isinstance(item, CommandEntry)]
    assert commands == ["deploy", "session.new"]
    assert sum(isinstance(item, ProviderEntry) for item in result.items) == 3


def test_only_subagents_are_kept(make_selection, prompts, sources, context) -> None:
    result = _run(make_selection(), prompts, sources, context)

    assert [agent.name for agent in context.agents] == ["reviewer"]
    implement = next(
        item for item in result.items
        if isinstance(item, PromptEntry) and item.name == "implement"
    )
    assert ("@reviewer", "agent") in implement.highlights


def test_prompts_disabled_skips_agent_fetch(make_selection, prompts, sources, context) -> None:
    result = _run(make_selection(prompts=False), prompts, sources, context)

    assert "agents" not in sources.calls
    assert context.agents == []
    assert "PROMPT" not in _groups(result.items)
    assert result.items[0] == Group("COMMAND", index=1)


def test_commands_disabled_skips_command_fetch(make_selection, prompts, sources, context) -> None:
    result = _run(make_selection(commands=False), prompts, sources, context)

    assert sources.calls == ["connection", "agents"]
    assert _groups(result.items) == ["PROMPT", "PROVIDER"]


def test_provider_disabled_omits_section(make_selection, prompts, sources, context) -> None:
    result = _run(make_selection(provider=False), prompts, sources, context)
    assert _groups(result.items) == ["PROMPT", "COMMAND"]


def test_empty_static_commands_still_fetch(make_selection, prompts, sources, context) -> None:
    result = _run(make_selection(commands={}), prompts, sources, context)

    assert "commands" in sources.calls
    assert [item.name for item in result.items if isinstance(item, CommandEntry)] == ["deploy"]


def test_everything_disabled_still_connects(make_selection, prompts, sources, context) -> None:
    result = _run(
        make_selection(prompts=False, commands=False, provider=False), prompts, sources, context
    )
    assert sources.calls == ["connection"]
    assert result.items == ()


@pytest.mark.parametrize(
    ("stage", "error"),
    [
        ("connection", ServerConnectionError("down")),
        ("agents", RequestError("agents failed")),
        ("commands", RequestError("commands failed")),
    ],
)
def test_failures_propagate_and_stop_the_pipeline(
    make_selection, prompts, sources, context, stage, error
) -> None:
    sources.fail_on = stage
    sources.error = error

    with pytest.raises(type(error)) as excinfo:
        _run(make_selection(), prompts, sources, context)

    assert excinfo.value is error
    assert sources.calls[-1] == stage
