"""HTTP transports used by the bot clients.

A transport exposes a single ``post(uri, body)`` call returning an
:class:`httpx.Response`. It owns the connection pool, TLS settings and
timeouts; clients never touch sockets directly and never retry.

:class:`HttpTransport` wraps :class:`httpx.Client`,
:class:`AsyncHttpTransport` wraps :class:`httpx.AsyncClient`. Both accept an
optional lower-level ``httpx`` transport so tests can plug in
:class:`httpx.MockTransport`.
"""

from __future__ import annotations

import threading
from typing import Any, Optional, Protocol

import httpx

from botapi import __version__
from botapi.client.body import InputFile, is_attachment
from botapi.models import RequestConfig

USER_AGENT = f"botapi/{__version__}"


class Transport(Protocol):
    """Anything able to POST a prepared body and return the response."""

    def post(self, uri: str, body: dict[str, Any]) -> httpx.Response: ...


def split_body(body: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a prepared body into form fields and multipart file parts.

    ``None`` values are dropped so optional parameters can be passed
    unset.

    Returns:
        A ``(data, files)`` tuple suitable for ``httpx``'s ``data=`` and
        ``files=`` arguments.
    """
    data: dict[str, Any] = {}
    files: dict[str, Any] = {}
    for key, value in body.items():
        if value is None:
            continue
        if isinstance(value, InputFile):
            files[key] = value.as_httpx_file()
        elif is_attachment(value):
            files[key] = value
        else:
            data[key] = value
    return data, files


class HttpTransport:
    """Blocking transport backed by a lazily created :class:`httpx.Client`.

    Args:
        config: Timeout and SSL settings. Defaults to :class:`RequestConfig`.
        transport: Optional ``httpx`` transport (e.g. ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        with self._lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.Client(
                    timeout=self._config.timeout,
                    verify=self._config.verify_ssl,
                    headers={"User-Agent": USER_AGENT},
                    transport=self._transport,
                )
            return self._client

    def post(self, uri: str, body: dict[str, Any]) -> httpx.Response:
        """POST *body* to *uri* as form data (multipart when files are present)."""
        data, files = split_body(body)
        return self._get_client().post(uri, data=data, files=files or None)

    def close(self) -> None:
        """Close the underlying connection pool."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None


class AsyncHttpTransport:
    """Non-blocking counterpart of :class:`HttpTransport`."""

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> AsyncHttpTransport:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                headers={"User-Agent": USER_AGENT},
                transport=self._transport,
            )
        return self._client

    async def post(self, uri: str, body: dict[str, Any]) -> httpx.Response:
        data, files = split_body(body)
        return await self._get_client().post(uri, data=data, files=files or None)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
