"""Helpers for building clients on top of :class:`httpx.MockTransport`."""

from __future__ import annotations

from typing import Any, Callable, Optional
from urllib.parse import parse_qsl

import httpx

from botapi.client.bot_client import BotClient
from botapi.client.transport import HttpTransport

TOKEN = "123456:ABC-DEF"

Handler = Callable[[httpx.Request], httpx.Response]


def json_handler(data: Any, status_code: int = 200, calls: Optional[list] = None) -> Handler:
    """Handler answering every request with *data* as JSON, recording requests."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, json=data)

    return handler


def make_client(handler: Handler, token: Optional[str] = TOKEN, **kwargs: Any) -> BotClient:
    """BotClient whose transport is backed by ``httpx.MockTransport(handler)``."""
    transport = HttpTransport(transport=httpx.MockTransport(handler))
    return BotClient(token, transport=transport, **kwargs)


def form_fields(request: httpx.Request) -> dict[str, str]:
    """Decode an ``application/x-www-form-urlencoded`` request body."""
    return dict(parse_qsl(request.content.decode("utf-8"), keep_blank_values=True))
