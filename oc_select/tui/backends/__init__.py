"""Picker backends and their registry."""

from oc_select.tui.backends.registry import (
    FALLBACK_BACKEND,
    BackendDescriptor,
    BackendRegistry,
    Resolution,
    default_registry,
    resolve_backend,
    select_backend,
)

__all__ = [
    "FALLBACK_BACKEND",
    "BackendDescriptor",
    "BackendRegistry",
    "Resolution",
    "default_registry",
    "resolve_backend",
    "select_backend",
]
