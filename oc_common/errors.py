"""Error types shared by the picker, its server client and the CLI.

Every error carries a JSON-friendly ``context`` mapping so it can be logged
as structured data, plus a short ``hint`` shown to the user and the process
``exit_code`` used by the CLI.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_UNAVAILABLE = 69


def _jsonable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {str(key): _jsonable(val) for key, val in context.items()}


class OCError(Exception):
    """Base error for every failure the picker reports to the user."""

    hint: str | None = None
    exit_code: int = EXIT_FAILURE

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}

    def user_message(self) -> str:
        """One-line message for the user, with the hint folded in."""
        if self.hint:
            return f"{self} ({self.hint})"
        return str(self)


class ServerConnectionError(OCError):
    """The opencode server could not be reached."""

    hint = "Start opencode with --port or point OCS_PORT at a running server."
    exit_code = EXIT_UNAVAILABLE


class RequestError(OCError):
    """A request to a reachable server failed."""


class BackendUnavailableError(OCError):
    """A requested picker backend is not usable in this environment."""


class ServiceError(OCError):
    """Starting or stopping the local opencode process failed."""

    hint = "Check the provider.cmd setting in your config file."


class ConfigurationError(OCError):
    """The config file or an override is invalid."""

    hint = "Fix the config file or unset OCS_CONFIG to use the defaults."
    exit_code = EXIT_CONFIG


E = TypeVar("E", bound=OCError)


def wrap_error(
    error_cls: type[E],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> E:
    """Build a typed error, keeping ``cause`` as ``__cause__``."""
    return error_cls(message, context=context, cause=cause)
