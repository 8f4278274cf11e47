"""Section building and ordering for the picker list."""

from __future__ import annotations

import dataclasses
from typing import Iterable, Mapping, Sequence

from oc_select.config import PromptConfig
from oc_select.context import RenderContext
from oc_select.models import (
    SECTION_COMMAND,
    SECTION_PROMPT,
    SECTION_PROVIDER,
    CommandEntry,
    CustomCommand,
    Group,
    Preview,
    PromptEntry,
    ProviderAction,
    ProviderEntry,
    SelectableItem,
)

PROVIDER_LABELS: dict[ProviderAction, str] = {
    ProviderAction.TOGGLE: "Toggle opencode",
    ProviderAction.START: "Start opencode",
    ProviderAction.STOP: "Stop opencode",
}


def prompt_sort_key(entry: PromptEntry) -> tuple[bool, bool, str]:
    """Follow-up prompts first, then manual-submit before auto-submit, then name."""
    return (not entry.ask, entry.submit, entry.name)


def merge_commands(
    static: Mapping[str, str], custom: Iterable[CustomCommand]
) -> dict[str, str]:
    merged = dict(static)
    for command in custom:
        merged[command.name] = command.description
    return merged


def build_prompt_entry(
    name: str, prompt: PromptConfig, context: RenderContext
) -> PromptEntry:
    rendered = context.render(prompt.prompt)
    return PromptEntry(
        name=name,
        template=prompt.prompt,
        ask=prompt.ask,
        submit=prompt.submit,
        highlights=rendered.input,
        preview=Preview(
            text=context.plaintext(rendered.output),
            annotations=context.annotations(rendered.output),
        ),
    )


def build_prompt_section(
    prompts: Mapping[str, PromptConfig], context: RenderContext
) -> list[SelectableItem]:
    entries = [build_prompt_entry(name, prompt, context) for name, prompt in prompts.items()]
    entries.sort(key=prompt_sort_key)
    return [Group(SECTION_PROMPT), *entries]


def build_command_section(commands: Mapping[str, str]) -> list[SelectableItem]:
    entries = [
        CommandEntry(name=name, description=description)
        for name, description in sorted(commands.items())
    ]
    return [Group(SECTION_COMMAND), *entries]


def build_provider_section() -> list[SelectableItem]:
    entries = [
        ProviderEntry(action=action, label=PROVIDER_LABELS[action])
        for action in (ProviderAction.TOGGLE, ProviderAction.START, ProviderAction.STOP)
    ]
    return [Group(SECTION_PROVIDER), *entries]


def assign_indices(
    blocks: Sequence[Sequence[SelectableItem]],
) -> tuple[SelectableItem, ...]:
    """Concatenate section blocks and number every item from 1."""
    flat = [item for block in blocks for item in block]
    return tuple(
        dataclasses.replace(item, index=position)
        for position, item in enumerate(flat, start=1)
    )
