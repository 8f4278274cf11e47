"""Public API surface for oc_common."""

from oc_common.errors import (
    BackendUnavailableError,
    ConfigurationError,
    OCError,
    RequestError,
    ServerConnectionError,
    ServiceError,
    wrap_error,
)
from oc_common.logging import bind_invocation, configure_logging

__all__ = [
    "bind_invocation",
    "configure_logging",
    "OCError",
    "BackendUnavailableError",
    "ConfigurationError",
    "RequestError",
    "ServerConnectionError",
    "ServiceError",
    "wrap_error",
]
