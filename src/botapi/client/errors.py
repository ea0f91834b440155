"""Classification of failed Bot API responses into typed exceptions."""

from __future__ import annotations

import json

import httpx

from botapi.exceptions import ApiError, ForbiddenError, NotFoundError

MISSING_DESCRIPTION = "-"


def error_for_response(response: httpx.Response) -> ApiError:
    """Build the exception describing a failed *response*.

    The body is decoded as JSON. When that fails (or the payload is not a
    JSON object) only the transport reason phrase is reported. Otherwise
    the payload's ``description`` (``"-"`` when absent) is used:

    * 403 -> :class:`~botapi.exceptions.ForbiddenError` (description)
    * 404 -> :class:`~botapi.exceptions.NotFoundError` (description)
    * anything else -> :class:`~botapi.exceptions.ApiError`
      (``"<reason>: <description>"``)

    The function has no side effects; the caller decides whether to raise.

    Args:
        response: The failed :class:`httpx.Response`.

    Returns:
        The exception instance (not raised).
    """
    status = response.status_code
    reason = response.reason_phrase
    try:
        payload = json.loads(response.text)
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        return ApiError(reason, status_code=status)

    description = payload.get("description")
    if description is None:
        description = MISSING_DESCRIPTION
    description = str(description)
    if status == 403:
        return ForbiddenError(description, status, description, payload)
    if status == 404:
        return NotFoundError(description, status, description, payload)
    return ApiError(f"{reason}: {description}", status, description, payload)
