"""Configuration helpers for oc_common."""

from .env import (
    env_bool,
    env_int,
    env_name,
    parse_assignments,
    parse_bool_env,
    parse_int_env,
    read_env,
)

__all__ = [
    "env_bool",
    "env_int",
    "env_name",
    "parse_assignments",
    "parse_bool_env",
    "parse_int_env",
    "read_env",
]
