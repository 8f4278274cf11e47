"""Shared helpers for opencode-select."""

from oc_common.api import OCError, configure_logging

__all__ = ["configure_logging", "OCError"]
