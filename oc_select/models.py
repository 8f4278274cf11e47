"""Selectable items shown by the picker.

A picker list is a flat tuple of :data:`SelectableItem` values. Each section
starts with a :class:`Group` marker followed by its entries; the ``index`` of
every item is assigned once the whole list is assembled.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

SECTION_PROMPT = "PROMPT"
SECTION_COMMAND = "COMMAND"
SECTION_PROVIDER = "PROVIDER"

# (text, style) pair; style None means "no highlight".
Span = Tuple[str, Union[str, None]]
# (start_line, start_col, end_line, end_col, style), 0-based.
Annotation = Tuple[int, int, int, int, str]


class ProviderAction(str, Enum):
    TOGGLE = "toggle"
    START = "start"
    STOP = "stop"


@dataclass(frozen=True)
class Preview:
    text: str = ""
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class Agent:
    name: str
    mode: str = ""
    description: str = ""


@dataclass(frozen=True)
class CustomCommand:
    name: str
    description: str = ""


@dataclass(frozen=True)
class Group:
    """Section marker; never selectable."""

    name: str
    index: int = 0


@dataclass(frozen=True)
class PromptEntry:
    name: str
    template: str
    ask: bool = False
    submit: bool = False
    highlights: tuple[Span, ...] = ()
    preview: Preview | None = None
    index: int = 0

    @property
    def summary(self) -> str:
        return self.template


@dataclass(frozen=True)
class CommandEntry:
    name: str
    description: str = ""
    index: int = 0

    @property
    def summary(self) -> str:
        return self.description

    @property
    def highlights(self) -> tuple[Span, ...]:
        return ((self.description, "comment"),)

    @property
    def preview(self) -> Preview | None:
        return None


@dataclass(frozen=True)
class ProviderEntry:
    action: ProviderAction
    label: str
    index: int = 0

    @property
    def name(self) -> str:
        return self.action.value

    @property
    def summary(self) -> str:
        return self.label

    @property
    def highlights(self) -> tuple[Span, ...]:
        return ((self.label, "comment"),)

    @property
    def preview(self) -> Preview | None:
        return None


Entry = Union[PromptEntry, CommandEntry, ProviderEntry]
SelectableItem = Union[Group, PromptEntry, CommandEntry, ProviderEntry]


def is_selectable(item: SelectableItem) -> bool:
    return not isinstance(item, Group)


def wants_followup(item: SelectableItem) -> bool:
    """Return True for prompt entries that ask for extra input before running."""
    return isinstance(item, PromptEntry) and item.ask
