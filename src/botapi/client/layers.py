"""Behaviour layers composed around the ``request`` contract.

Every layer wraps an inner executor and exposes the same
``request(action, body=None)`` method, so layers stack freely::

    client = BotClient(token)
    executor = TypedResponseExecutor(DebugExecutor(client))
    me = executor.request("getMe")   # -> botapi.models.User

* :class:`DebugExecutor` -- traces calls on the ``--verbose`` channel.
* :class:`DeferredExecutor` -- hands calls to a dispatcher and returns
  immediately.
* :class:`TypedResponseExecutor` -- unwraps ``result`` and validates it into
  a pydantic model.

:func:`compose` builds the usual stacks.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from pydantic import BaseModel

from botapi import output
from botapi.client.bot_client import BotClient
from botapi.client.dispatch import Dispatcher, prepare_async_args
from botapi.models import Chat, Message, User, WebhookInfo


class Executor(Protocol):
    def request(self, action: str, body: Optional[Mapping[str, Any]] = None) -> Any: ...


DEFAULT_RESPONSE_TYPES: dict[str, type[BaseModel]] = {
    "getMe": User,
    "getChat": Chat,
    "sendMessage": Message,
    "editMessageText": Message,
    "forwardMessage": Message,
    "sendPhoto": Message,
    "sendDocument": Message,
    "getWebhookInfo": WebhookInfo,
}


class DebugExecutor:
    """Writes each call, its result and its failure to the debug channel."""

    def __init__(self, inner: Executor) -> None:
        self._inner = inner

    def request(self, action: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        output.debug(f"-> {action} {dict(body or {})!r}")
        try:
            result = self._inner.request(action, body)
        except Exception as exc:
            output.debug(f"<- {action} failed: {type(exc).__name__}: {exc}")
            raise
        output.debug(f"<- {action} {result!r}")
        return result


class DeferredExecutor:
    """Prepares the body and submits the call to *dispatcher*.

    :meth:`request` returns ``None`` without waiting; the dispatcher is
    responsible for performing the POST and dealing with its outcome.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def request(self, action: str, body: Optional[Mapping[str, Any]] = None) -> None:
        self._dispatcher.submit(*prepare_async_args(action, body))
        return None


class TypedResponseExecutor:
    """Returns the ``result`` member of each response, typed when possible.

    Args:
        inner: Executor returning the raw decoded response.
        types: Map of API method name to pydantic model. Methods not in the
            map return the raw ``result`` value. Defaults to
            :data:`DEFAULT_RESPONSE_TYPES`.
    """

    def __init__(
        self,
        inner: Executor,
        types: Optional[Mapping[str, type[BaseModel]]] = None,
    ) -> None:
        self._inner = inner
        self._types = dict(DEFAULT_RESPONSE_TYPES if types is None else types)

    def request(self, action: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        response = self._inner.request(action, body)
        result = response.get("result") if isinstance(response, dict) else None
        model = self._types.get(action)
        if model is None or result is None:
            return result
        return model.model_validate(result)


def compose(
    client: BotClient,
    debug: bool = False,
    typed: bool = False,
    dispatcher: Optional[Dispatcher] = None,
) -> Executor:
    """Stack the requested layers around *client*.

    With a *dispatcher* calls are deferred, which makes *typed* meaningless
    since no response is returned; it is ignored in that case.
    """
    if dispatcher is not None:
        executor: Executor = DeferredExecutor(dispatcher)
        return DebugExecutor(executor) if debug else executor
    executor = DebugExecutor(client) if debug else client
    if typed:
        executor = TypedResponseExecutor(executor)
    return executor
