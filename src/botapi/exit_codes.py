"""Numeric process exit codes used by the ``botapi`` CLI.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~botapi.exceptions.BotApiError` subclass, so shell
scripts can tell failures apart without parsing stderr.

Example::

    $ botapi request sendMessage --field chat_id=1 --field text=hi
    $ echo $?
    3   # EXIT_FORBIDDEN -- the bot was blocked by the user
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (includes configuration problems)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_FORBIDDEN = 3
"""The API answered HTTP 403 (bot blocked, kicked, or not allowed)."""

EXIT_NOT_FOUND = 4
"""The API answered HTTP 404 (unknown method or invalid token)."""

EXIT_API_ERROR = 5
"""The API answered with any other non-success status."""
