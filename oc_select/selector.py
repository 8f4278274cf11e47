"""Entry point: gather, show and dispatch one picker selection."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Callable, Mapping

from oc_common.errors import RequestError, ServerConnectionError
from oc_common.logging import bind_fields, bind_invocation
from oc_select.actions import ServerActions
from oc_select.client import ServerSources
from oc_select.config import SelectionConfig, Settings, load_settings, resolve_selection
from oc_select.context import RenderContext, default_variables
from oc_select.dispatch import Actions, ChoiceDispatcher
from oc_select.pipeline import Aggregation, Sources, aggregate
from oc_select.provider import ProcessProvider
from oc_select.tui.backends.registry import BackendRegistry, default_registry, select_backend
from oc_select.tui.components.form import RichForm
from oc_select.tui.components.presenter import RichPresenter
from oc_select.tui.core.protocols import Backend, Presenter

logger = logging.getLogger(__name__)

ActionsFactory = Callable[[Aggregation], Actions]


def build_context(settings: Settings, extra: Mapping[str, str] | None = None) -> RenderContext:
    variables = default_variables()
    variables.update(settings.context)
    variables.update(extra or {})
    return RenderContext(variables)


def build_provider(settings: Settings) -> ProcessProvider | None:
    if settings.provider is None:
        return None
    return ProcessProvider(
        settings.provider.cmd, settings.server.port, settings.provider.state_dir
    )


def _default_actions(settings: Settings) -> ActionsFactory:
    def factory(aggregation: Aggregation) -> Actions:
        return ServerActions(aggregation.handle, RichForm(), provider=build_provider(settings))

    return factory


def gather(
    settings: Settings,
    selection: SelectionConfig,
    context: RenderContext,
    sources: Sources | None = None,
) -> Aggregation:
    """Run the aggregation pipeline to completion for one invocation."""
    sources = sources or ServerSources(settings.server)
    return asyncio.run(aggregate(selection, settings.prompts, sources, context))


def run_selection(
    overrides: Mapping[str, Any] | None = None,
    *,
    settings: Settings | None = None,
    sources: Sources | None = None,
    registry: BackendRegistry | None = None,
    presenter: Presenter | None = None,
    actions_factory: ActionsFactory | None = None,
    context: RenderContext | None = None,
    backend: Backend | None = None,
) -> None:
    """Gather, show and dispatch; server failures propagate to the caller.

    ``overrides`` is deep-merged over the configured selection options for
    this call only. ``backend`` bypasses the preference lookup (used for
    headless runs).
    """
    settings = settings or load_settings()
    presenter = presenter or RichPresenter()
    selection = resolve_selection(settings, overrides)
    context = context or build_context(settings)
    bind_invocation(invocation=uuid.uuid4().hex[:8], picker=selection.picker)

    aggregation = gather(settings, selection, context, sources)

    if backend is None:
        backend = select_backend(selection.picker, registry or default_registry(), presenter)
    bind_fields(backend=backend.name)
    actions = (actions_factory or _default_actions(settings))(aggregation)
    dispatcher = ChoiceDispatcher(settings.prompts, context, actions)
    logger.debug("Showing %d items with %s", len(aggregation.items), backend.name)
    backend.choose(aggregation.items, dispatcher, selection.backend_options(backend.name))


def select(
    overrides: Mapping[str, Any] | None = None,
    *,
    presenter: Presenter | None = None,
    **kwargs: Any,
) -> None:
    """Select from prompts, commands and provider actions, then run the choice.

    Nothing is returned: the outcome is a dispatched action, a cancelled
    picker or a single error notification when the server fails. Keyword
    arguments are those of :func:`run_selection`.
    """
    presenter = presenter or RichPresenter()
    try:
        run_selection(overrides, presenter=presenter, **kwargs)
    except (ServerConnectionError, RequestError) as exc:
        logger.debug("Selection failed: %s", exc, extra={"oc_error": exc.to_dict()})
        presenter.error(exc.user_message())
