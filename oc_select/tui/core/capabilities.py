"""Environment probes deciding which picker backends can run."""

from __future__ import annotations

import os
import sys
from typing import Any, NamedTuple

try:
    from rapidfuzz import fuzz as _fuzz
    from rapidfuzz import process as _process

    _HAS_RAPIDFUZZ = True
except ImportError:  # pragma: no cover - optional at runtime
    _fuzz = None
    _process = None
    _HAS_RAPIDFUZZ = False

# Terminals prompt_toolkit cannot drive in full-screen mode.
UNSUPPORTED_TERMS = frozenset({"dumb", "unknown"})


class FuzzyMatcher(NamedTuple):
    process: Any
    scorer: Any


def is_tty_available() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def supports_fullscreen_ui() -> bool:
    if os.environ.get("TERM", "").lower() in UNSUPPORTED_TERMS:
        return False
    return is_tty_available()


def has_fuzzy_search() -> bool:
    return _HAS_RAPIDFUZZ


def fuzzy_matcher() -> FuzzyMatcher | None:
    if not _HAS_RAPIDFUZZ:
        return None
    return FuzzyMatcher(_process, _fuzz.WRatio)


def panel_supported() -> bool:
    """The panel backend needs a full-screen terminal and fuzzy search."""
    return supports_fullscreen_ui() and has_fuzzy_search()


def minimal_supported() -> bool:
    return supports_fullscreen_ui()
