"""Tests for ``botapi request``."""

from __future__ import annotations

import json

import httpx
import pytest

from botapi.commands.request import build_body, parse_fields
from botapi.exceptions import InvalidUsageError
from botapi.exit_codes import EXIT_FORBIDDEN, EXIT_INVALID_USAGE, EXIT_NOT_FOUND

from tests.helpers import TOKEN, form_fields


class TestParsing:
    def test_fields_decode_json_values(self):
        assert parse_fields(["chat_id=42", "text=hello", "silent=true", "ids=[1,2]"]) == {
            "chat_id": 42,
            "text": "hello",
            "silent": True,
            "ids": [1, 2],
        }

    def test_field_value_may_contain_equals(self):
        assert parse_fields(["text=a=b"]) == {"text": "a=b"}

    @pytest.mark.parametrize("bad", ["noequals", "=value"])
    def test_malformed_field(self, bad):
        with pytest.raises(InvalidUsageError):
            parse_fields([bad])

    def test_body_then_fields(self):
        assert build_body('{"chat_id": 1, "text": "a"}', ["text=b"], []) == {
            "chat_id": 1,
            "text": "b",
        }

    @pytest.mark.parametrize("body", ["[1]", "{oops"])
    def test_bad_body(self, body):
        with pytest.raises(InvalidUsageError):
            build_body(body, [], [])

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidUsageError, match="Cannot read"):
            build_body(None, [], [f"photo={tmp_path / 'nope.jpg'}"])


class TestRequestCommand:
    def test_prints_full_response(self, api, invoke):
        api.respond({"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot"}})

        result = invoke("--json", "request", "getMe")

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["result"]["id"] == 1
        assert str(api.last.url) == f"https://api.telegram.org/bot{TOKEN}/getMe"

    def test_sends_fields(self, api, invoke):
        result = invoke(
            "--json", "request", "sendMessage", "-F", "chat_id=42", "-F", "text=hello",
            "--body", '{"reply_markup": {"remove_keyboard": true}}',
        )

        assert result.exit_code == 0, result.output
        assert form_fields(api.last) == {
            "chat_id": "42",
            "text": "hello",
            "reply_markup": '{"remove_keyboard":true}',
        }

    def test_uploads_files(self, api, invoke, isolated_config):
        (isolated_config / "cat.jpg").write_bytes(b"JPEGDATA")

        result = invoke("--json", "request", "sendPhoto", "-F", "chat_id=1", "--file", "photo=cat.jpg")

        assert result.exit_code == 0, result.output
        assert b'name="photo"; filename="cat.jpg"' in api.last.content
        assert b"JPEGDATA" in api.last.content

    def test_typed_result(self, api, invoke):
        api.respond({"ok": True, "result": {"id": 7, "is_bot": True, "first_name": "Bot"}})

        result = invoke("--json", "request", "getMe", "--typed")

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"id": 7, "is_bot": True, "first_name": "Bot"}

    def test_forbidden_exit_code(self, api, invoke):
        api.respond({"ok": False, "description": "bot was blocked"}, status_code=403)

        result = invoke("request", "sendMessage", "-F", "chat_id=1", "-F", "text=hi")

        assert result.exit_code == EXIT_FORBIDDEN
        assert "Error: bot was blocked" in result.output

    def test_not_found_exit_code(self, api, invoke):
        api.respond({"ok": False, "description": "Not Found"}, status_code=404)
        result = invoke("request", "noSuchMethod")
        assert result.exit_code == EXIT_NOT_FOUND

    def test_generic_api_error(self, api, invoke):
        api.respond({"ok": False, "description": "chat not found"}, status_code=400)
        result = invoke("request", "getChat", "-F", "chat_id=1")
        assert result.exit_code == 5
        assert "Bad Request: chat not found" in result.output

    def test_malformed_field(self, api, invoke):
        result = invoke("request", "getMe", "-F", "oops")
        assert result.exit_code == EXIT_INVALID_USAGE
        assert api.calls == []

    def test_unknown_bot(self, api, invoke):
        result = invoke("request", "getMe", "--bot", "ghost")
        assert result.exit_code == 1
        assert "'ghost' not configured" in result.output

    def test_no_bot_configured(self, isolated_config, invoke):
        result = invoke("request", "getMe")
        assert result.exit_code == 1
        assert "No bot selected" in result.output

    def test_verbose_traces_call(self, api, invoke):
        result = invoke("-v", "--json", "request", "getMe")
        assert result.exit_code == 0
        assert "[debug] -> getMe" in result.output

    def test_transport_failure(self, api, invoke):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        api.handler = refuse
        result = invoke("request", "getMe")

        assert result.exit_code == 1
        assert "Request failed: connection refused" in result.output
