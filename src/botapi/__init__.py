"""botapi -- client library and CLI for the Telegram Bot HTTP API.

The library turns bot configuration into a ready-to-use client, prepares
request bodies (including file attachments nested anywhere inside JSON
fields), performs the HTTP call and maps failures onto typed exceptions.

Typical usage::

    from botapi.client import BotClient

    client = BotClient("123:abc", username="my_bot")
    client.request("sendMessage", {"chat_id": 1, "text": "hi"})

Modules:
    client: Bot clients, body preparation, error classification, layers.
    models: Pydantic models for configuration and typed responses.
    config: XDG-aware configuration and bot registry bootstrap.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes for the ``botapi`` CLI.
    output: stdout/stderr output system with Rich support.
    app: Typer application and console entry point.
"""

__version__ = "0.1.0"
