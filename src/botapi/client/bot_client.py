"""Synchronous Bot API client.

:class:`BotClient` is the resolved, ready-to-use handle for one bot: it
holds the token, the optional username and the base URI, and executes API
methods through :meth:`BotClient.request`::

    with BotClient("123:abc", username="my_bot") as client:
        client.request("sendMessage", {"chat_id": 1, "text": "hi"})

Handles are immutable after construction, so one instance can serve
concurrent requests from several threads. Every call prepares its own body.

See Also:
    :class:`~botapi.client.async_client.AsyncBotClient` for the asyncio
    variant and :mod:`botapi.client.layers` for debug, deferred and typed
    behaviour layered around the same ``request`` contract.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import httpx

from botapi.client.body import prepare_body
from botapi.client.errors import error_for_response
from botapi.client.transport import HttpTransport, Transport
from botapi.exceptions import ConfigurationError
from botapi.models import SERVER, RequestConfig

URL_TEMPLATE = "{server}/bot{token}/"


def build_base_uri(server: str, token: str) -> str:
    """Return the method prefix for *token* on *server*."""
    return URL_TEMPLATE.format(server=server, token=token)


def coerce_request_config(value: Union[RequestConfig, Mapping[str, Any], None]) -> RequestConfig:
    if value is None:
        return RequestConfig()
    if isinstance(value, RequestConfig):
        return value
    return RequestConfig.model_validate(dict(value))


def parse_response(response: httpx.Response) -> Any:
    """Decode a Bot API response or raise the matching :class:`ApiError`.

    Statuses of 300 and above are classified by
    :func:`~botapi.client.errors.error_for_response`. A success status
    with a body that is not JSON raises :class:`json.JSONDecodeError`.
    """
    if response.status_code >= 300:
        raise error_for_response(response)
    return response.json()


class BotClient:
    """Blocking client bound to a single bot token.

    Args:
        token: Bot token. Falls back to ``options["token"]``.
        username: Bot username. Falls back to ``options["username"]``.
        server: API server. Defaults to :data:`~botapi.models.SERVER`.
        transport: Object with a ``post(uri, body)`` method. When ``None``
            an :class:`~botapi.client.transport.HttpTransport` is created
            and closed by :meth:`close`.
        request: Timeout / SSL settings for the default transport.
        **options: Remaining configuration keys; unknown keys are ignored.

    Raises:
        ConfigurationError: If no token was given.
    """

    __slots__ = ("_token", "_username", "_server", "_base_uri", "_transport", "_owns_transport")

    def __init__(
        self,
        token: Optional[str] = None,
        username: Optional[str] = None,
        server: Optional[str] = None,
        transport: Optional[Transport] = None,
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
            transport = HttpTransport(coerce_request_config(request))
        self._transport = transport

    # ------------------------------------------------------------------ #
    # Identity
    # ------------------------------------------------------------------ #

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
        """Method prefix, ``<server>/bot<token>/``."""
        return self._base_uri

    def __repr__(self) -> str:
        return f"<{type(self).__name__}#{id(self)}({self._username})>"

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> BotClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the default transport. Injected transports are left alone."""
        if self._owns_transport:
            self._transport.close()

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def request(self, action: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        """Call API method *action* and return the decoded JSON response.

        Args:
            action: Method name, e.g. ``"sendMessage"``.
            body: Method parameters. Nested mappings/lists are sent as JSON
                and files nested in them are uploaded as extra parts.

        Returns:
            The full decoded response, e.g. ``{"ok": True, "result": {...}}``.

        Raises:
            ForbiddenError: On HTTP 403.
            NotFoundError: On HTTP 404.
            ApiError: On any other status of 300 or above.
        """
        return self.perform(action, prepare_body(body))

    def perform(self, action: str, prepared_body: dict[str, Any]) -> Any:
        """POST an already prepared body. Used by deferred workers."""
        response = self.http_request(f"{self._base_uri}{action}", prepared_body)
        return parse_response(response)

    def http_request(self, uri: str, body: dict[str, Any]) -> httpx.Response:
        """Low-level POST. Override or wrap for instrumentation."""
        return self._transport.post(uri, body)
