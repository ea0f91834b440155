"""Asynchronous Bot API client -- mirrors :class:`~botapi.client.bot_client.BotClient`.

:class:`AsyncBotClient` uses :class:`httpx.AsyncClient` through
:class:`~botapi.client.transport.AsyncHttpTransport` so it can be awaited
inside an event loop. Body preparation and error classification are
shared with the blocking client.

Example::

    async with AsyncBotClient("123:abc") as client:
        me = await client.request("getMe")
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import httpx

from botapi.client.body import prepare_body
from botapi.client.bot_client import build_base_uri, coerce_request_config, parse_response
from botapi.client.transport import AsyncHttpTransport
from botapi.exceptions import ConfigurationError
from botapi.models import SERVER, RequestConfig


class AsyncBotClient:
    """Non-blocking client bound to a single bot token.

    Accepts the same arguments as
    :class:`~botapi.client.bot_client.BotClient`; ``transport`` must provide
    an awaitable ``post(uri, body)``.
    """

    __slots__ = ("_token", "_username", "_server", "_base_uri", "_transport", "_owns_transport")

    def __init__(
        self,
        token: Optional[str] = None,
        username: Optional[str] = None,
        server: Optional[str] = None,
        transport: Optional[Any] = None,
        request: Union[RequestConfig, Mapping[str, Any], None] = None,
        **options: Any,
    ) -> None:
        token = token or options.get("token")
        if not token:
            raise ConfigurationError("Bot token is not set")
        self._token = str(token)
        self._username = username or options.get("username")
        self._server = server or SERVER
        self._base_uri = build_base_uri(self._server, self._token)
        self._owns_transport = transport is None
        if transport is None:
            transport = AsyncHttpTransport(coerce_request_config(request))
        self._transport = transport

    @property
    def token(self) -> str:
        return self._token

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def server(self) -> str:
        return self._server

    @property
    def base_uri(self) -> str:
        return self._base_uri

    def __repr__(self) -> str:
        return f"<{type(self).__name__}#{id(self)}({self._username})>"

    async def __aenter__(self) -> AsyncBotClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()

    async def request(self, action: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        """Call API method *action*; see :meth:`BotClient.request`."""
        return await self.perform(action, prepare_body(body))

    async def perform(self, action: str, prepared_body: dict[str, Any]) -> Any:
        response = await self.http_request(f"{self._base_uri}{action}", prepared_body)
        return parse_response(response)

    async def http_request(self, uri: str, body: dict[str, Any]) -> httpx.Response:
        return await self._transport.post(uri, body)
