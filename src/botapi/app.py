"""Typer application and console entry point for botapi.

:func:`main` is the ``botapi`` console script declared in
``pyproject.toml``. It installs a SIGINT handler, registers the built-in
sub-commands and runs the Typer app. :class:`~botapi.exceptions.BotApiError`
escaping a command becomes a clean error line and its exit code; anything
else is written to a crash log under the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from botapi import __version__
from botapi.exit_codes import EXIT_GENERIC_FAILURE
from botapi.output import OutputFormat


app = typer.Typer(
    name="botapi",
    help="Call the Telegram Bot API from the command line.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"botapi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Trace API calls on stderr."
    ),
) -> None:
    """Root callback: installs the global :class:`~botapi.output.OutputManager`.

    Without ``--json``/``--plain`` the format comes from ``output.format``
    in the global config, then from TTY detection.
    """
    from botapi.output import OutputManager, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = _configured_format()

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


def _configured_format() -> OutputFormat:
    from botapi.config import load_global_config
    from botapi.exceptions import ConfigurationError

    try:
        return OutputFormat(load_global_config().output.format)
    except (ConfigurationError, ValueError):
        return OutputFormat.AUTO


def register_commands(target: typer.Typer) -> None:
    """Attach the built-in sub-commands to *target*."""
    from botapi.commands.bots import bots_app
    from botapi.commands.config import config_app
    from botapi.commands.request import request_command
    from botapi.commands.webhook import webhook_app

    target.command("request")(request_command)
    target.add_typer(bots_app, name="bots", help="Manage configured bots.")
    target.add_typer(webhook_app, name="webhook", help="Manage the bot webhook.")
    target.add_typer(config_app, name="config", help="Configuration management.")


def _setup_signal_handlers() -> None:
    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to the data directory; return its path."""
    from botapi.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now().strftime('%Y%m%d-%H%M%S')}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``botapi`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        register_commands(app)
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from botapi.exceptions import BotApiError
        from botapi.output import error

        if isinstance(exc, BotApiError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log()
        error(f"Unexpected error: {exc}. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
