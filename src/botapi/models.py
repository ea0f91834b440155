"""Canonical Pydantic models shared across botapi modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`OutputConfig`, :class:`BotConfig` and
    :class:`GlobalConfig`.

**Response models** -- produced by
:class:`~botapi.client.layers.TypedResponseExecutor` from the ``result``
member of a successful API response: :class:`User`, :class:`Chat`,
:class:`Message` and :class:`WebhookInfo`. They only declare the fields the
CLI relies on; everything else the API sends is preserved in
``model_extra``.

All models use Pydantic v2.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

SERVER = "https://api.telegram.org"
"""Default Bot API host."""


# --- Configuration ---


class RequestConfig(BaseModel):
    """HTTP transport settings applied to every call made by one client."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class BotConfig(BaseModel):
    """Configuration of a single bot, keyed by name in :class:`GlobalConfig`.

    The token is either given inline (``token``) or through a credential
    source descriptor (``token_source``) resolved by
    :func:`~botapi.config.resolve_credential` at registry build time.

    Example::

        BotConfig(token_source="env:MAIN_BOT_TOKEN", username="main_bot")
    """

    model_config = ConfigDict(extra="allow")

    token: Optional[str] = Field(default=None, description="Inline bot token")
    token_source: Optional[str] = Field(
        default=None, description="Token source: env:VAR or file:/path"
    )
    username: Optional[str] = None
    server: str = Field(default=SERVER, description="Bot API server URL")
    request: RequestConfig = Field(default_factory=RequestConfig)


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/botapi/config.json``.

    Loaded and saved by :func:`~botapi.config.load_global_config` and
    :func:`~botapi.config.save_global_config`.
    """

    default_bot: Optional[str] = None
    auto_select_single_bot: bool = True
    bots: dict[str, BotConfig] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Typed responses ---


class User(BaseModel):
    """A Telegram user or bot (``getMe`` result)."""

    model_config = ConfigDict(extra="allow")

    id: int
    is_bot: bool = False
    first_name: str = ""
    username: Optional[str] = None


class Chat(BaseModel):
    """A chat (``getChat`` result)."""

    model_config = ConfigDict(extra="allow")

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None


class Message(BaseModel):
    """A message (``sendMessage`` and friends)."""

    model_config = ConfigDict(extra="allow")

    message_id: int
    date: Optional[int] = None
    chat: Optional[Chat] = None
    text: Optional[str] = None


class WebhookInfo(BaseModel):
    """Current webhook status (``getWebhookInfo`` result)."""

    model_config = ConfigDict(extra="allow")

    url: str = ""
    has_custom_certificate: bool = False
    pending_update_count: int = 0
    last_error_message: Optional[str] = None
