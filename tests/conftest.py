"""Shared test fixtures for botapi.

Provides isolated config directories, output state management and a
Typer CLI runner wired to the real root callback.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest
import typer

from botapi.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches sys.stdout/sys.stderr at creation time; CliRunner
    swaps those streams, so a stale manager would write to closed files.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    return output


@pytest.fixture
def verbose_output() -> OutputManager:
    output = OutputManager(no_color=True, verbose=True)
    set_output(output)
    return output


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories at *tmp_path* and clear BOTAPI_* variables.

    Also changes the working directory so ``./botapi.json`` lookups stay
    inside the test.
    """
    monkeypatch.setattr("botapi.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("BOTAPI_BOT", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_config(isolated_config: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a raw global config dict into the isolated config directory."""

    def _write(data: dict[str, Any]) -> Path:
        path = isolated_config / "config" / "botapi" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_app(isolated_config: Path) -> typer.Typer:
    """A fresh root app with the real callback and built-in commands."""
    from botapi.app import main_callback, register_commands

    app = typer.Typer(no_args_is_help=True, add_completion=False)
    app.callback()(main_callback)
    register_commands(app)
    return app


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoke(cli_app: typer.Typer, cli_runner) -> Callable[..., Any]:
    """Run ``botapi --no-color <args>`` and return the click Result."""

    def _invoke(*args: str, input: str | None = None):
        return cli_runner.invoke(cli_app, ["--no-color", *args], input=input)

    return _invoke
