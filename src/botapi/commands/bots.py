"""Bot commands -- manage the bots stored in the global config.

Typical workflow::

    botapi bots add main --token-source env:MAIN_BOT_TOKEN --username main_bot --default
    botapi bots list
    botapi bots show main
    botapi bots remove main
"""

from __future__ import annotations

from typing import Optional

import typer

from botapi.output import error, format_response, info, print_table, success


bots_app = typer.Typer(no_args_is_help=True)


def mask_token(token: Optional[str]) -> str:
    """Hide everything but the bot id part of a token (``123:***``)."""
    if not token:
        return ""
    bot_id, sep, _ = token.partition(":")
    return f"{bot_id}:***" if sep else "***"


@bots_app.command("list")
def bots_list() -> None:
    """List configured bots."""
    from botapi.config import load_global_config

    config = load_global_config()
    if not config.bots:
        info("No bots configured. Add one with: botapi bots add NAME --token TOKEN")
        return

    rows = []
    for name in sorted(config.bots):
        bot = config.bots[name]
        marker = "*" if name == config.default_bot else ""
        rows.append([
            f"{name}{marker}",
            bot.username or "",
            bot.token_source or mask_token(bot.token),
            bot.server,
        ])
    print_table(["name", "username", "token", "server"], rows, title="Bots")


@bots_app.command("show")
def bots_show(name: str = typer.Argument(help="Bot name.")) -> None:
    """Show one bot's configuration with the token masked."""
    from botapi.config import load_global_config

    config = load_global_config()
    bot = config.bots.get(name)
    if bot is None:
        error(f"Bot '{name}' is not configured")
        raise typer.Exit(code=2)

    data = bot.model_dump(mode="json", exclude_none=True)
    if "token" in data:
        data["token"] = mask_token(data["token"])
    format_response(data)


@bots_app.command("add")
def bots_add(
    name: str = typer.Argument(help="Name used to refer to the bot."),
    token: Optional[str] = typer.Option(None, "--token", help="Literal bot token."),
    token_source: Optional[str] = typer.Option(
        None, "--token-source", help="Token source: env:VAR or file:/path."
    ),
    username: Optional[str] = typer.Option(None, "--username", help="Bot username."),
    server: Optional[str] = typer.Option(None, "--server", help="Bot API server URL."),
    default: bool = typer.Option(False, "--default", help="Make this the default bot."),
) -> None:
    """Add or replace a bot.

    Exactly one of ``--token`` and ``--token-source`` is required.
    """
    from botapi.config import load_global_config, save_global_config
    from botapi.models import BotConfig

    if bool(token) == bool(token_source):
        error("Pass exactly one of --token or --token-source")
        raise typer.Exit(code=2)

    config = load_global_config()
    fields = {"token": token, "token_source": token_source, "username": username, "server": server}
    config.bots[name] = BotConfig(**{k: v for k, v in fields.items() if v is not None})
    if default:
        config.default_bot = name
    save_global_config(config)
    success(f"Bot '{name}' saved.")


@bots_app.command("remove")
def bots_remove(name: str = typer.Argument(help="Bot name.")) -> None:
    """Remove a bot (and clear it as default)."""
    from botapi.config import load_global_config, save_global_config

    config = load_global_config()
    if name not in config.bots:
        error(f"Bot '{name}' is not configured")
        raise typer.Exit(code=2)

    del config.bots[name]
    if config.default_bot == name:
        config.default_bot = None
    save_global_config(config)
    success(f"Bot '{name}' removed.")
