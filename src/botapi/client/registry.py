"""Bot registry and client resolution.

Applications configure their bots once at startup (see
:func:`botapi.config.build_registry`) and later refer to them by name.
:class:`ClientResolver` turns whatever the caller has -- a registered
name, an existing client, a configuration mapping or a raw token -- into a
:class:`~botapi.client.bot_client.BotClient`::

    resolver = ClientResolver(registry)
    resolver.wrap(BotId("main"))                  # registered client
    resolver.wrap({"token": "123:abc"})           # new client from config
    resolver.wrap("123:abc", username="my_bot")   # new client from a token

The registry is built before any resolution happens and is never mutated
afterwards, so concurrent lookups need no locking.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from pydantic import BaseModel

from botapi.client.bot_client import BotClient
from botapi.exceptions import ConfigurationError


@dataclass(frozen=True)
class BotId:
    """Name of a bot registered in a :class:`BotRegistry`.

    Plain strings passed to :meth:`ClientResolver.wrap` are tokens; wrap a
    name in :class:`BotId` to look it up instead.
    """

    name: str

    def __str__(self) -> str:
        return self.name


class BotRegistry(Mapping[str, BotClient]):
    """Read-only mapping of bot names to clients."""

    def __init__(self, bots: Optional[Mapping[str, BotClient]] = None) -> None:
        self._bots = MappingProxyType(dict(bots or {}))

    def __getitem__(self, name: str) -> BotClient:
        return self._bots[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bots)

    def __len__(self) -> int:
        return len(self._bots)

    def lookup(self, bot_id: BotId | str) -> Optional[BotClient]:
        """Return the client registered under *bot_id*, or ``None``."""
        return self._bots.get(str(bot_id))

    def names(self) -> list[str]:
        return sorted(self._bots)


class InputKind(enum.Enum):
    """What :meth:`ClientResolver.wrap` was given."""

    IDENTIFIER = "identifier"
    EXISTING_CLIENT = "existing_client"
    CONFIG_MAPPING = "config_mapping"
    RAW_TOKEN = "raw_token"


def input_kind(value: Any) -> InputKind:
    """Classify a :meth:`ClientResolver.wrap` input."""
    if isinstance(value, BotId):
        return InputKind.IDENTIFIER
    if isinstance(value, BotClient):
        return InputKind.EXISTING_CLIENT
    if isinstance(value, (Mapping, BaseModel)):
        return InputKind.CONFIG_MAPPING
    return InputKind.RAW_TOKEN


def _config_to_options(value: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    if isinstance(value, BaseModel):
        value = value.model_dump(exclude_none=True)
    return {str(key): item for key, item in value.items()}


class ClientResolver:
    """Resolves heterogeneous inputs into :class:`BotClient` instances.

    Args:
        registry: Lookup table for :class:`BotId` inputs. Defaults to an
            empty registry.
    """

    def __init__(self, registry: Optional[BotRegistry] = None) -> None:
        self._registry = registry if registry is not None else BotRegistry()

    @property
    def registry(self) -> BotRegistry:
        return self._registry

    def wrap(self, value: Any, **options: Any) -> BotClient:
        """Return a client for *value*.

        * :class:`BotId` -- the registered client. *options* are ignored.
        * :class:`BotClient` -- returned unchanged. *options* are ignored.
        * mapping or pydantic model -- a new client built from its keys
          merged with *options* (*options* win).
        * anything else -- used as the token of a new client built with
          *options*.

        Raises:
            ConfigurationError: If a :class:`BotId` is not registered.
        """
        kind = input_kind(value)
        if kind is InputKind.IDENTIFIER:
            return self.by_id(value)
        if kind is InputKind.EXISTING_CLIENT:
            return value
        if kind is InputKind.CONFIG_MAPPING:
            return BotClient(**{**_config_to_options(value), **options})
        return BotClient(value, **options)

    def by_id(self, bot_id: BotId | str) -> BotClient:
        client = self._registry.lookup(bot_id)
        if client is None:
            raise ConfigurationError(f"{BotClient.__name__} {str(bot_id)!r} not configured")
        return client
