"""Unified picker for opencode prompts, commands and provider actions."""

from oc_select.api import select

__all__ = ["select"]
