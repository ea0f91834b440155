"""Bot API clients and the request pipeline.

Provides the blocking :class:`BotClient` and the asyncio
:class:`AsyncBotClient`, the body preparation and error classification
they share, client resolution through a :class:`BotRegistry`, and the
debug / deferred / typed layers built around ``request``.

Example::

    from botapi.client import BotClient, ClientResolver, BotId

    resolver = ClientResolver(registry)
    client = resolver.wrap(BotId("main"))
    client.request("sendMessage", {"chat_id": 1, "text": "hi"})
"""

from botapi.client.async_client import AsyncBotClient
from botapi.client.body import InputFile, extract_files, prepare_body
from botapi.client.bot_client import BotClient
from botapi.client.dispatch import ThreadDispatcher, prepare_async_args
from botapi.client.errors import error_for_response
from botapi.client.layers import (
    DebugExecutor,
    DeferredExecutor,
    TypedResponseExecutor,
    compose,
)
from botapi.client.registry import BotId, BotRegistry, ClientResolver, InputKind

__all__ = [
    "AsyncBotClient",
    "BotClient",
    "BotId",
    "BotRegistry",
    "ClientResolver",
    "DebugExecutor",
    "DeferredExecutor",
    "InputFile",
    "InputKind",
    "ThreadDispatcher",
    "TypedResponseExecutor",
    "compose",
    "error_for_response",
    "extract_files",
    "prepare_async_args",
    "prepare_body",
]
