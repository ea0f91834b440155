"""Tests for failed-response classification (botapi.client.errors)."""

from __future__ import annotations

import httpx
import pytest

from botapi.client.errors import error_for_response
from botapi.exceptions import ApiError, ForbiddenError, NotFoundError
from botapi.exit_codes import EXIT_API_ERROR, EXIT_FORBIDDEN, EXIT_NOT_FOUND


def _response(status: int, **kwargs) -> httpx.Response:
    return httpx.Response(status, **kwargs)


class TestErrorForResponse:
    def test_forbidden(self):
        exc = error_for_response(
            _response(403, json={"ok": False, "description": "bot was blocked"})
        )
        assert type(exc) is ForbiddenError
        assert exc.message == "bot was blocked"
        assert exc.status_code == 403
        assert exc.exit_code == EXIT_FORBIDDEN

    def test_not_found(self):
        exc = error_for_response(
            _response(404, json={"ok": False, "description": "Not Found: method not found"})
        )
        assert type(exc) is NotFoundError
        assert exc.message == "Not Found: method not found"
        assert exc.exit_code == EXIT_NOT_FOUND

    def test_generic_status_prefixes_reason(self):
        exc = error_for_response(
            _response(400, json={"ok": False, "description": "chat not found"})
        )
        assert type(exc) is ApiError
        assert exc.message == "Bad Request: chat not found"
        assert exc.description == "chat not found"
        assert exc.response == {"ok": False, "description": "chat not found"}
        assert exc.exit_code == EXIT_API_ERROR

    def test_missing_description_is_dash(self):
        exc = error_for_response(_response(500, json={"ok": False}))
        assert exc.message == "Internal Server Error: -"

    def test_missing_description_forbidden(self):
        exc = error_for_response(_response(403, json={}))
        assert isinstance(exc, ForbiddenError)
        assert exc.message == "-"

    @pytest.mark.parametrize("status", [403, 404, 502])
    def test_unparseable_body_reports_reason_only(self, status):
        exc = error_for_response(_response(status, text="<html>gateway</html>"))
        assert type(exc) is ApiError
        assert exc.message == httpx.codes.get_reason_phrase(status)
        assert exc.description is None
        assert exc.response is None

    def test_unparseable_404(self):
        exc = error_for_response(_response(404, text="not json"))
        assert type(exc) is ApiError
        assert str(exc) == "Not Found"

    def test_non_object_json_is_unparseable(self):
        exc = error_for_response(_response(429, json=["retry"]))
        assert type(exc) is ApiError
        assert exc.message == "Too Many Requests"

    def test_is_not_raised(self):
        result = error_for_response(_response(400, json={"description": "x"}))
        assert isinstance(result, Exception)

    def test_repr(self):
        exc = error_for_response(_response(403, json={"description": "blocked"}))
        assert repr(exc) == "ForbiddenError('blocked', status_code=403)"
