"""Aggregation of prompts, commands and provider actions into one list."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from oc_select.config import PromptConfig, SelectionConfig
from oc_select.context import RenderContext
from oc_select.models import Agent, CustomCommand, SelectableItem
from oc_select.sections import (
    assign_indices,
    build_command_section,
    build_prompt_section,
    build_provider_section,
    merge_commands,
)

logger = logging.getLogger(__name__)

SUBAGENT_MODE = "subagent"


class Sources(Protocol):
    async def get_connection(self) -> Any: ...

    async def fetch_agents(self, handle: Any) -> Sequence[Agent]: ...

    async def fetch_commands(self, handle: Any) -> Sequence[CustomCommand]: ...


@dataclass(frozen=True)
class Aggregation:
    items: tuple[SelectableItem, ...]
    handle: Any


async def aggregate(
    selection: SelectionConfig,
    prompts: Mapping[str, PromptConfig],
    sources: Sources,
    context: RenderContext,
) -> Aggregation:
    """Fetch every enabled source in order and build the picker list.

    Fetches run one after the other. Any failure propagates unchanged and no
    partial list is returned.
    """
    sections = selection.sections
    handle = await sources.get_connection()

    if sections.prompts:
        agents = await sources.fetch_agents(handle)
        context.agents = [agent for agent in agents if agent.mode == SUBAGENT_MODE]
        logger.debug("Loaded %d subagents", len(context.agents))

    custom_commands: Sequence[CustomCommand] = []
    if sections.commands_enabled:
        custom_commands = await sources.fetch_commands(handle)
        logger.debug("Loaded %d custom commands", len(custom_commands))

    blocks: list[list[SelectableItem]] = []
    if sections.prompts:
        blocks.append(build_prompt_section(prompts, context))
    if sections.commands is not False:
        blocks.append(build_command_section(merge_commands(sections.commands, custom_commands)))
    if sections.provider:
        blocks.append(build_provider_section())

    return Aggregation(items=assign_indices(blocks), handle=handle)
