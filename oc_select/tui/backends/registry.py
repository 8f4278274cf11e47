"""Backend capability descriptors and preference resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Collection, Iterable

from oc_common.errors import BackendUnavailableError
from oc_select.tui.core import capabilities
from oc_select.tui.core.protocols import Backend, Presenter

logger = logging.getLogger(__name__)

FALLBACK_BACKEND = "console"


def _always() -> bool:
    return True


@dataclass(frozen=True)
class BackendDescriptor:
    """What a backend needs and how to build it."""

    name: str
    factory: Callable[[], Backend]
    probe: Callable[[], bool] = _always
    description: str = ""


@dataclass(frozen=True)
class Resolution:
    name: str
    missing: str | None = None

    @property
    def fell_back(self) -> bool:
        return self.missing is not None


def resolve_backend(
    preferred: str | None,
    available: Collection[str],
    fallback: str = FALLBACK_BACKEND,
) -> Resolution:
    """Pick the backend to use from a preference and the available names."""
    if not preferred or preferred == fallback:
        return Resolution(fallback)
    if preferred in available:
        return Resolution(preferred)
    return Resolution(fallback, missing=preferred)


class BackendRegistry:
    def __init__(
        self,
        descriptors: Iterable[BackendDescriptor] = (),
        fallback: str = FALLBACK_BACKEND,
    ) -> None:
        self.fallback = fallback
        self._descriptors: dict[str, BackendDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: BackendDescriptor) -> None:
        self._descriptors[descriptor.name] = descriptor

    def get(self, name: str) -> BackendDescriptor:
        return self._descriptors[name]

    def names(self) -> list[str]:
        return list(self._descriptors)

    def available(self) -> list[str]:
        return [name for name, descriptor in self._descriptors.items() if descriptor.probe()]

    def create(self, name: str) -> Backend:
        return self._descriptors[name].factory()


def select_backend(
    preferred: str | None,
    registry: BackendRegistry,
    presenter: Presenter,
) -> Backend:
    """Resolve ``preferred`` and build the backend, warning once on fallback."""
    resolution = resolve_backend(preferred, registry.available(), registry.fallback)
    if resolution.fell_back:
        error = BackendUnavailableError(
            f"{resolution.missing} picker not available, falling back to {resolution.name}",
            context={"requested": resolution.missing, "fallback": resolution.name},
        )
        logger.debug(str(error), extra={"oc_error": error.to_dict()})
        presenter.warning(str(error))
    return registry.create(resolution.name)


def _console_backend() -> Backend:
    from oc_select.tui.backends.console import ConsoleBackend

    return ConsoleBackend()


def _panel_backend() -> Backend:
    from oc_select.tui.backends.panel import PanelBackend

    return PanelBackend()


def _minimal_backend() -> Backend:
    from oc_select.tui.backends.minimal import MinimalBackend

    return MinimalBackend()


def default_registry() -> BackendRegistry:
    return BackendRegistry(
        [
            BackendDescriptor(
                FALLBACK_BACKEND, _console_backend, description="Numbered console list"
            ),
            BackendDescriptor(
                "panel",
                _panel_backend,
                probe=capabilities.panel_supported,
                description="Full-screen list with highlights, fuzzy search and preview",
            ),
            BackendDescriptor(
                "minimal",
                _minimal_backend,
                probe=capabilities.minimal_supported,
                description="Full-screen plain list with preview buffer",
            ),
        ]
    )
