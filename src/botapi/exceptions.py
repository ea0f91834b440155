"""Exception hierarchy for botapi.

All exceptions inherit from :class:`BotApiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`botapi.exit_codes`.
The CLI entry point in :func:`botapi.app.main` catches ``BotApiError`` and
exits with the matching code.

Subclass hierarchy::

    BotApiError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigurationError  (exit 1)
    +-- ApiError            (exit 5)
        +-- ForbiddenError  (exit 3)
        +-- NotFoundError   (exit 4)

:class:`ApiError` and its subclasses are only created by
:func:`botapi.client.errors.error_for_response` from a failed HTTP
response. Transport failures (``httpx.HTTPError``) are never wrapped.
"""

from __future__ import annotations

from typing import Any, Optional

from botapi.exit_codes import (
    EXIT_API_ERROR,
    EXIT_FORBIDDEN,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
)


class BotApiError(Exception):
    """Base exception for all botapi errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(BotApiError):
    """Raised for invalid CLI arguments (malformed ``--field`` or ``--body``)."""

    exit_code = EXIT_INVALID_USAGE


class ConfigurationError(BotApiError):
    """Raised when a bot cannot be resolved or the config files are invalid."""

    exit_code = EXIT_GENERIC_FAILURE


class ApiError(BotApiError):
    """Raised when the Bot API answers with a non-success status.

    Each instance describes one failed response.
    Attributes:
        message: The error message (``"<reason>: <description>"`` for
            generic failures, the bare description for 403/404).
        status_code: HTTP status code of the failed response.
        description: The ``description`` field of the error payload, or
            ``None`` when the body could not be parsed.
        response: The decoded error payload, or ``None``.
    """

    exit_code = EXIT_API_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        description: Optional[str] = None,
        response: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.description = description
        self.response = response

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code!r})"


class ForbiddenError(ApiError):
    """Raised on HTTP 403 -- the bot was blocked, kicked, or lacks rights."""

    exit_code = EXIT_FORBIDDEN


class NotFoundError(ApiError):
    """Raised on HTTP 404 -- unknown API method or revoked token."""

    exit_code = EXIT_NOT_FOUND
