"""Config commands -- view and modify global configuration.

Provides the ``botapi config`` group for reading, updating and resetting
:class:`~botapi.models.GlobalConfig`. Bots themselves are managed with
``botapi bots``.
"""

from __future__ import annotations

import typer

from botapi.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the config file location and its settings (tokens masked)."""
    from botapi.commands.bots import mask_token
    from botapi.config import global_config_path, load_global_config

    config = load_global_config()
    info(f"Config file: {global_config_path()}")
    data = config.model_dump(mode="json", exclude_none=True)
    for bot in data.get("bots", {}).values():
        if "token" in bot:
            bot["token"] = mask_token(bot["token"])
    format_response(data)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (dot notation, e.g. 'output.format')."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the type of the current field (bool, int or
    str) and the whole config is validated before saving::

        botapi config set default_bot main
        botapi config set output.format json
        botapi config set bots.main.request.timeout 10
    """
    from botapi.config import load_global_config, save_global_config
    from botapi.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if not isinstance(target.get(k), dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    current = target[final_key]
    coerced: object = value
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, (int, float)):
        try:
            coerced = type(current)(value)
        except ValueError:
            error(f"Expected a number for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults, removing every configured bot."""
    from botapi.config import save_global_config
    from botapi.models import GlobalConfig

    if not force and not typer.confirm("Reset all config (including bots) to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
