"""Webhook commands -- point a bot at an HTTPS endpoint or back to polling.

::

    botapi webhook set https://example.com/telegram/webhook --secret-token s3cret
    botapi webhook info
    botapi webhook delete --drop-pending-updates
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
import typer

from botapi.commands import open_client
from botapi.exceptions import BotApiError
from botapi.exit_codes import EXIT_GENERIC_FAILURE
from botapi.output import error, format_response, success


webhook_app = typer.Typer(no_args_is_help=True)


def _call(bot: Optional[str], action: str, params: dict[str, Any], typed: bool = False) -> Any:
    from botapi.client.layers import compose
    from botapi.output import get_output

    try:
        with open_client(bot) as client:
            return compose(client, debug=get_output().is_verbose, typed=typed).request(action, params)
    except BotApiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except httpx.HTTPError as exc:
        error(f"Request failed: {exc}")
        raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None


@webhook_app.command("set")
def webhook_set(
    url: str = typer.Argument(help="HTTPS URL that will receive updates."),
    bot: Optional[str] = typer.Option(None, "--bot", "-b", help="Configured bot name."),
    secret_token: Optional[str] = typer.Option(
        None, "--secret-token", help="Sent back in the X-Telegram-Bot-Api-Secret-Token header."
    ),
    certificate: Optional[str] = typer.Option(
        None, "--certificate", help="Path to a self-signed public certificate."
    ),
    max_connections: Optional[int] = typer.Option(None, "--max-connections"),
    allowed_updates: Optional[str] = typer.Option(
        None, "--allowed-updates", help="Comma-separated update types, e.g. message,callback_query."
    ),
    drop_pending_updates: bool = typer.Option(False, "--drop-pending-updates"),
) -> None:
    """Register URL as the bot's webhook."""
    from botapi.client.body import InputFile

    params: dict[str, Any] = {
        "url": url,
        "secret_token": secret_token,
        "max_connections": max_connections,
        "drop_pending_updates": drop_pending_updates or None,
    }
    if allowed_updates is not None:
        params["allowed_updates"] = [u.strip() for u in allowed_updates.split(",") if u.strip()]
    if certificate is not None:
        params["certificate"] = InputFile.from_path(certificate)

    _call(bot, "setWebhook", params)
    success(f"Webhook set to {url}")


@webhook_app.command("delete")
def webhook_delete(
    bot: Optional[str] = typer.Option(None, "--bot", "-b", help="Configured bot name."),
    drop_pending_updates: bool = typer.Option(False, "--drop-pending-updates"),
) -> None:
    """Remove the webhook so the bot can use getUpdates again."""
    _call(bot, "deleteWebhook", {"drop_pending_updates": drop_pending_updates or None})
    success("Webhook deleted.")


@webhook_app.command("info")
def webhook_info(bot: Optional[str] = typer.Option(None, "--bot", "-b", help="Configured bot name.")) -> None:
    """Show the current webhook status."""
    info = _call(bot, "getWebhookInfo", {}, typed=True)
    format_response(info.model_dump(mode="json", exclude_none=True))
