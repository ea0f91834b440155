"""``botapi request`` -- call any Bot API method.

Parameters come from a JSON object (``--body``), individual ``--field``
pairs and ``--file`` uploads, merged in that order::

    botapi request getMe
    botapi request sendMessage -F chat_id=42 -F text="hello"
    botapi request sendPhoto -F chat_id=42 --file photo=./cat.jpg
    botapi request sendMessage --body '{"chat_id": 42, "text": "hi",
        "reply_markup": {"inline_keyboard": [[{"text": "ok", "callback_data": "1"}]]}}'
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import typer

from botapi.commands import open_client
from botapi.exceptions import BotApiError, InvalidUsageError
from botapi.exit_codes import EXIT_GENERIC_FAILURE
from botapi.output import error, format_response, get_output


def parse_fields(fields: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` pairs; values are decoded as JSON when they parse."""
    result: dict[str, Any] = {}
    for item in fields:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise InvalidUsageError(f"Expected key=value, got: {item}")
        try:
            result[key] = json.loads(raw)
        except ValueError:
            result[key] = raw
    return result


def parse_files(files: list[str]) -> dict[str, Any]:
    """Parse ``key=PATH`` pairs into :class:`~botapi.client.body.InputFile` values."""
    from botapi.client.body import InputFile

    result: dict[str, Any] = {}
    for item in files:
        key, sep, path = item.partition("=")
        if not sep or not key or not path:
            raise InvalidUsageError(f"Expected key=PATH, got: {item}")
        try:
            result[key] = InputFile.from_path(path)
        except OSError as exc:
            raise InvalidUsageError(f"Cannot read {path}: {exc}") from exc
    return result


def build_body(body: Optional[str], fields: list[str], files: list[str]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if body:
        try:
            parsed = json.loads(body)
        except ValueError as exc:
            raise InvalidUsageError(f"--body is not valid JSON: {exc}") from exc
        if not isinstance(parsed, dict):
            raise InvalidUsageError("--body must be a JSON object")
        params.update(parsed)
    params.update(parse_fields(fields))
    params.update(parse_files(files))
    return params


def request_command(
    action: str = typer.Argument(help="API method name, e.g. sendMessage."),
    bot: Optional[str] = typer.Option(None, "--bot", "-b", help="Configured bot name."),
    body: Optional[str] = typer.Option(None, "--body", help="JSON object with method parameters."),
    field: Optional[list[str]] = typer.Option(
        None, "--field", "-F", help="Parameter as key=value (value parsed as JSON if possible)."
    ),
    file: Optional[list[str]] = typer.Option(None, "--file", help="File upload as key=PATH."),
    typed: bool = typer.Option(False, "--typed", help="Print only the typed result."),
) -> None:
    """Call API method ACTION on a configured bot and print the response.

    Exits with the error's exit code when the API rejects the call
    (3 for 403, 4 for 404, 5 otherwise).
    """
    from botapi.client.layers import compose

    try:
        params = build_body(body, field or [], file or [])
        with open_client(bot) as client:
            executor = compose(client, debug=get_output().is_verbose, typed=typed)
            result = executor.request(action, params)
    except BotApiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except httpx.HTTPError as exc:
        error(f"Request failed: {exc}")
        raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None

    if hasattr(result, "model_dump"):
        result = result.model_dump(mode="json", exclude_none=True)
    format_response(result)

