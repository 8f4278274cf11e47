"""Default actions: talk to the opencode server and the local provider."""

from __future__ import annotations

import asyncio
import logging

from oc_common.errors import ServiceError
from oc_select.client import OpencodeClient, ServerHandle
from oc_select.dispatch import Actions, PromptRequest
from oc_select.provider import ProcessProvider
from oc_select.tui.core.protocols import Form

logger = logging.getLogger(__name__)


class ServerActions(Actions):
    def __init__(
        self,
        handle: ServerHandle,
        form: Form,
        provider: ProcessProvider | None = None,
        client: OpencodeClient | None = None,
    ) -> None:
        self._client = client or OpencodeClient(handle)
        self._form = form
        self._provider = provider

    async def _send(self, text: str, submit: bool) -> None:
        await self._client.append_prompt(text)
        if submit:
            await self._client.submit_prompt()

    def _render(self, template: str, request: PromptRequest) -> str:
        context = request.context
        return context.plaintext(context.render(template).output)

    def prompt(self, template: str, request: PromptRequest) -> None:
        text = self._render(template, request)
        logger.info("Sending prompt %r", request.name)
        asyncio.run(self._send(text, request.config.submit))

    def ask(self, template: str, request: PromptRequest) -> None:
        text = self._form.ask("Ask opencode", default=self._render(template, request))
        if text is None:
            logger.info("Follow-up input for %r cancelled", request.name)
            return
        logger.info("Sending prompt %r with follow-up input", request.name)
        asyncio.run(self._send(self._render(text, request), request.config.submit))

    def command(self, name: str) -> None:
        logger.info("Executing command %r", name)
        asyncio.run(self._client.execute_command(name))

    def _require_provider(self) -> ProcessProvider:
        if self._provider is None:
            raise ServiceError("No opencode provider is configured")
        return self._provider

    def toggle(self) -> None:
        self._require_provider().toggle()

    def start(self) -> None:
        self._require_provider().start()

    def stop(self) -> None:
        self._require_provider().stop()
