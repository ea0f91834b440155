"""Configuration management: XDG paths, atomic writes, bot selection.

This module is the bootstrap side of the library:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.botapi/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- one :class:`~botapi.models.GlobalConfig` JSON file
  holding every configured bot.
* **Bot selection** -- :func:`resolve_bot_name` applies the precedence
  chain CLI flag > ``BOTAPI_BOT`` > ``./botapi.json`` > global default >
  the only configured bot.
* **Registry** -- :func:`build_registry` resolves tokens and builds the
  read-only :class:`~botapi.client.registry.BotRegistry` the application
  hands to :class:`~botapi.client.registry.ClientResolver`.

Writes use a temp-file-then-rename strategy (:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional

from botapi.client.registry import BotRegistry, ClientResolver
from botapi.client.transport import Transport
from botapi.exceptions import ConfigurationError
from botapi.models import BotConfig, GlobalConfig

_APP_NAME = "botapi"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "botapi.json"
ENV_BOT = "BOTAPI_BOT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/botapi/`` (default ``~/.config/botapi/``).
    On macOS/Windows: ``~/.botapi/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/botapi/`` (default ``~/.local/share/botapi/``).
    On macOS/Windows: ``~/.botapi/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* through a temp file in the same directory.

    The temp file is removed on any failure, so *path* is either the old
    content or the new one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        try:
            os.unlink(tmp.name)
        except OSError:
            pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration; a missing file yields the defaults.

    Raises:
        ConfigurationError: If the file holds invalid JSON or fails
            validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    data = config.model_dump(mode="json", exclude_none=True)
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./botapi.json`` if present.

    Raises:
        ConfigurationError: If the file holds invalid JSON.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigurationError(f"Invalid project config at {path}: {exc}") from exc


# --- Bot selection ---


def resolve_bot_name(config: GlobalConfig, cli_bot: Optional[str] = None) -> str:
    """Pick the bot to use.

    Precedence (high to low):
        1. ``cli_bot`` (``--bot``)
        2. ``BOTAPI_BOT`` environment variable
        3. ``default_bot`` in ``./botapi.json``
        4. ``default_bot`` in the global config
        5. the only configured bot, when ``auto_select_single_bot`` is set

    Raises:
        ConfigurationError: If no bot can be selected.
    """
    if cli_bot:
        return cli_bot
    env_bot = os.environ.get(ENV_BOT)
    if env_bot:
        return env_bot
    project = load_project_config()
    if project and project.get("default_bot"):
        return str(project["default_bot"])
    if config.default_bot:
        return config.default_bot
    if config.auto_select_single_bot and len(config.bots) == 1:
        return next(iter(config.bots))
    raise ConfigurationError(
        "No bot selected. Pass --bot, set BOTAPI_BOT, or configure default_bot."
    )


# --- Credentials ---


def resolve_credential(source: str) -> str:
    """Resolve a credential source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads the file, stripped of whitespace

    Raises:
        ConfigurationError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigurationError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigurationError(f"Cannot read credential file {path}: {exc}") from exc

    raise ConfigurationError(f"Unknown credential source format: {source}")


def resolve_token(bot: BotConfig) -> str:
    """Return the bot's token, reading ``token_source`` when no literal is set."""
    if bot.token:
        return bot.token
    if bot.token_source:
        return resolve_credential(bot.token_source)
    raise ConfigurationError("Bot has neither token nor token_source configured")


# --- Registry bootstrap ---


def build_registry(
    config: GlobalConfig,
    names: Optional[Iterable[str]] = None,
    transport: Optional[Transport] = None,
) -> BotRegistry:
    """Build clients for the configured bots.

    Args:
        config: The loaded global configuration.
        names: Restrict the registry to these bots. Unknown names are
            skipped so resolution reports them as not configured.
        transport: Shared transport for every client (tests pass a stub).

    Raises:
        ConfigurationError: If a selected bot's token cannot be resolved.
    """
    selected = config.bots if names is None else {
        name: config.bots[name] for name in names if name in config.bots
    }
    resolver = ClientResolver()
    bots = {}
    for name, bot in selected.items():
        try:
            token = resolve_token(bot)
        except ConfigurationError as exc:
            raise ConfigurationError(f"Bot '{name}': {exc}") from exc
        options: dict[str, Any] = {"token": token, "transport": transport}
        bots[name] = resolver.wrap(bot, **options)
    return BotRegistry(bots)
