"""Fixtures for CLI command tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from botapi.client.transport import HttpTransport

from tests.helpers import TOKEN


class FakeApi:
    """Records requests and answers with a configurable JSON response."""

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"ok": True, "result": True}

    def respond(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.calls[-1]


@pytest.fixture
def api(write_config, monkeypatch: pytest.MonkeyPatch) -> FakeApi:
    """Configure a default bot ``main`` whose HTTP traffic goes to a :class:`FakeApi`."""
    write_config({
        "default_bot": "main",
        "bots": {"main": {"token": TOKEN, "username": "main_bot"}},
    })
    fake = FakeApi()

    def transport_factory(config=None):
        return HttpTransport(config, transport=httpx.MockTransport(fake.handler))

    monkeypatch.setattr("botapi.client.bot_client.HttpTransport", transport_factory)
    return fake
