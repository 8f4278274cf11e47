"""HTTP client for a running opencode server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import aiohttp

from oc_common.errors import RequestError, ServerConnectionError, wrap_error
from oc_select.config import ServerConfig
from oc_select.models import Agent, CustomCommand

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], aiohttp.ClientSession]


@dataclass(frozen=True)
class ServerHandle:
    """Connection handle for a reachable server."""

    base_url: str


async def get_connection(
    server: ServerConfig, session_factory: SessionFactory = aiohttp.ClientSession
) -> ServerHandle:
    """Return a handle once the server answers ``GET /config``."""
    url = f"{server.base_url}/config"
    try:
        async with session_factory() as http:
            async with http.get(url) as resp:
                if resp.status >= 400:
                    raise ServerConnectionError(
                        f"opencode server at {server.base_url} answered HTTP {resp.status}",
                        context={"url": url, "status": resp.status},
                    )
    except (aiohttp.ClientError, OSError) as exc:
        raise wrap_error(
            ServerConnectionError,
            f"Could not reach opencode server at {server.base_url}",
            context={"url": url},
            cause=exc,
        ) from exc
    logger.debug("Connected to opencode server at %s", server.base_url)
    return ServerHandle(base_url=server.base_url)


class OpencodeClient:
    """Thin async wrapper over the opencode server HTTP API."""

    def __init__(
        self,
        handle: ServerHandle,
        session_factory: SessionFactory = aiohttp.ClientSession,
    ) -> None:
        self.handle = handle
        self._session_factory = session_factory

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        url = f"{self.handle.base_url}{path}"
        try:
            async with self._session_factory() as http:
                async with http.request(method, url, json=payload) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise RequestError(
                            f"{method} {path} failed with HTTP {resp.status}",
                            context={"url": url, "status": resp.status, "body": body[:300]},
                        )
                    if resp.content_type == "application/json":
                        return await resp.json()
                    return None
        except (aiohttp.ClientError, OSError) as exc:
            raise wrap_error(
                RequestError, f"{method} {path} failed", context={"url": url}, cause=exc
            ) from exc

    async def get_agents(self) -> list[Agent]:
        data = await self._request("GET", "/agent") or []
        return [
            Agent(
                name=str(raw.get("name", "")),
                mode=str(raw.get("mode", "")),
                description=str(raw.get("description") or ""),
            )
            for raw in data
        ]

    async def get_commands(self) -> list[CustomCommand]:
        data = await self._request("GET", "/command") or []
        return [
            CustomCommand(
                name=str(raw.get("name", "")),
                description=str(raw.get("description") or ""),
            )
            for raw in data
        ]

    async def append_prompt(self, text: str) -> None:
        await self._request("POST", "/tui/append-prompt", {"text": text})

    async def submit_prompt(self) -> None:
        await self._request("POST", "/tui/submit-prompt")

    async def clear_prompt(self) -> None:
        await self._request("POST", "/tui/clear-prompt")

    async def execute_command(self, command: str) -> None:
        await self._request("POST", "/tui/execute-command", {"command": command})


class ServerSources:
    """Pipeline sources backed by a live opencode server."""

    def __init__(
        self,
        server: ServerConfig,
        session_factory: SessionFactory = aiohttp.ClientSession,
    ) -> None:
        self._server = server
        self._session_factory = session_factory

    async def get_connection(self) -> ServerHandle:
        return await get_connection(self._server, self._session_factory)

    async def fetch_agents(self, handle: ServerHandle) -> list[Agent]:
        return await OpencodeClient(handle, self._session_factory).get_agents()

    async def fetch_commands(self, handle: ServerHandle) -> list[CustomCommand]:
        return await OpencodeClient(handle, self._session_factory).get_commands()
