"""Built-in CLI sub-commands for botapi.

* :mod:`~botapi.commands.request` -- call any API method on a configured bot.
* :mod:`~botapi.commands.bots` -- add, list, show and remove bots.
* :mod:`~botapi.commands.webhook` -- set, delete and inspect the webhook.
* :mod:`~botapi.commands.config` -- view and modify global settings.

Each module exports either a :class:`typer.Typer` sub-application or a
plain callback registered on the root app.
"""

from __future__ import annotations

from typing import Optional

from botapi.client.bot_client import BotClient


def open_client(bot: Optional[str] = None) -> BotClient:
    """Resolve the bot selected by *bot* (or the configured default) into a client.

    Raises:
        ConfigurationError: If no bot is selected, it is not configured, or
            its token cannot be resolved.
    """
    from botapi.client.registry import BotId, ClientResolver
    from botapi.config import build_registry, load_global_config, resolve_bot_name

    config = load_global_config()
    name = resolve_bot_name(config, bot)
    resolver = ClientResolver(build_registry(config, [name]))
    return resolver.wrap(BotId(name))
