"""Readers for the ``OCS_*`` environment variables."""

from __future__ import annotations

import os
from typing import Mapping

ENV_PREFIX = "OCS_"

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def env_name(key: str) -> str:
    """``"log_level"`` -> ``"OCS_LOG_LEVEL"``."""
    return f"{ENV_PREFIX}{key.upper()}"


def read_env(key: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Return the stripped value of ``OCS_<KEY>``; blank counts as unset."""
    source = os.environ if environ is None else environ
    value = source.get(env_name(key))
    if value is None or not value.strip():
        return None
    return value.strip()


def parse_bool_env(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() in TRUE_VALUES


def parse_int_env(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def env_bool(key: str, environ: Mapping[str, str] | None = None) -> bool | None:
    return parse_bool_env(read_env(key, environ))


def env_int(key: str, environ: Mapping[str, str] | None = None) -> int | None:
    return parse_int_env(read_env(key, environ))


def parse_assignments(value: str | None) -> dict[str, str]:
    """Parse ``"this=main.py,branch=dev"`` into template variables.

    Tokens without ``=`` or with an empty name are skipped; only the first
    ``=`` splits, so values may contain more of them.
    """
    assignments: dict[str, str] = {}
    if not value:
        return assignments
    for token in value.split(","):
        name, sep, raw = token.strip().partition("=")
        name = name.strip().lstrip("@")
        if not sep or not name:
            continue
        assignments[name] = raw.strip()
    return assignments
