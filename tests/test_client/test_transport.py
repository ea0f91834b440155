"""Tests for the httpx-backed transports."""

from __future__ import annotations

import io

import httpx

from botapi.client.body import InputFile
from botapi.client.transport import HttpTransport, split_body
from botapi.models import RequestConfig


class TestSplitBody:
    def test_plain_fields_go_to_data(self):
        assert split_body({"a": 1, "b": "x"}) == ({"a": 1, "b": "x"}, {})

    def test_none_values_are_dropped(self):
        assert split_body({"a": None, "b": 2}) == ({"b": 2}, {})

    def test_input_file_becomes_httpx_tuple(self):
        f = InputFile("a.png", b"PNG", "image/png")
        data, files = split_body({"chat_id": 1, "photo": f})
        assert data == {"chat_id": 1}
        assert files == {"photo": ("a.png", b"PNG", "image/png")}

    def test_stream_passes_through(self):
        stream = io.BytesIO(b"x")
        _, files = split_body({"document": stream})
        assert files["document"] is stream


class TestHttpTransport:
    def test_post_form_encoded(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        with HttpTransport(transport=httpx.MockTransport(handler)) as transport:
            response = transport.post("https://example.org/bot1:a/getMe", {"a": "b"})

        assert response.json() == {"ok": True}
        assert seen[0].headers["content-type"] == "application/x-www-form-urlencoded"
        assert seen[0].content == b"a=b"

    def test_client_is_reused(self):
        transport = HttpTransport(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        assert transport._get_client() is transport._get_client()
        transport.close()

    def test_close_then_reopen(self):
        transport = HttpTransport(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        first = transport._get_client()
        transport.close()
        assert first.is_closed
        assert transport._get_client() is not first
        transport.close()

    def test_timeout_from_config(self):
        transport = HttpTransport(RequestConfig(timeout=3))
        assert transport._get_client().timeout.read == 3
        transport.close()
