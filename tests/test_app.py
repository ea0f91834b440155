"""Tests for the console entry point."""

from __future__ import annotations

import pytest

from botapi import __version__


def test_version(invoke):
    result = invoke("--version")
    assert result.exit_code == 0
    assert f"botapi {__version__}" in result.output


def test_no_args_shows_help(cli_runner, cli_app):
    result = cli_runner.invoke(cli_app, [])
    assert "request" in result.output
    assert "webhook" in result.output


def test_main_maps_library_errors_to_exit_codes(isolated_config, monkeypatch, capsys):
    from botapi import app as app_module
    from botapi.exceptions import ConfigurationError

    def failing_app():
        raise ConfigurationError("config is broken")

    monkeypatch.setattr(app_module, "app", failing_app)
    monkeypatch.setattr(app_module, "register_commands", lambda target: None)
    monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)
    monkeypatch.setenv("NO_COLOR", "1")

    with pytest.raises(SystemExit) as exc_info:
        app_module.main()

    assert exc_info.value.code == 1
    assert "Error: config is broken" in capsys.readouterr().err


def test_main_writes_crash_log(isolated_config, monkeypatch, capsys):
    from botapi import app as app_module

    def failing_app():
        raise RuntimeError("kaboom")

    monkeypatch.setattr(app_module, "app", failing_app)
    monkeypatch.setattr(app_module, "register_commands", lambda target: None)
    monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)
    monkeypatch.setenv("NO_COLOR", "1")

    with pytest.raises(SystemExit) as exc_info:
        app_module.main()

    assert exc_info.value.code == 1
    logs = list((isolated_config / "data" / "botapi" / "logs").glob("crash-*.log"))
    assert len(logs) == 1
    assert "RuntimeError: kaboom" in logs[0].read_text()
    assert "Unexpected error: kaboom" in capsys.readouterr().err
