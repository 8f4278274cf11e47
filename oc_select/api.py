"""Stable API surface for opencode-select."""

from __future__ import annotations

from oc_select.config import (
    PromptConfig,
    SectionsConfig,
    SelectionConfig,
    Settings,
    load_settings,
    resolve_selection,
)
from oc_select.context import RenderContext
from oc_select.dispatch import Actions, ChoiceDispatcher, PromptRequest
from oc_select.models import (
    CommandEntry,
    Group,
    PromptEntry,
    ProviderAction,
    ProviderEntry,
    SelectableItem,
)
from oc_select.pipeline import Aggregation, Sources, aggregate
from oc_select.selector import gather, run_selection, select

__all__ = [
    "select",
    "run_selection",
    "gather",
    "aggregate",
    "Aggregation",
    "Sources",
    "Actions",
    "ChoiceDispatcher",
    "PromptRequest",
    "RenderContext",
    "Settings",
    "SelectionConfig",
    "SectionsConfig",
    "PromptConfig",
    "load_settings",
    "resolve_selection",
    "SelectableItem",
    "Group",
    "PromptEntry",
    "CommandEntry",
    "ProviderEntry",
    "ProviderAction",
]
