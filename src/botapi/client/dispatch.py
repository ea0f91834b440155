"""Deferred execution of API calls.

A dispatcher receives ``(action, prepared_body)`` pairs and performs the
POST out of band. The caller never waits for completion and never sees the
result; once submitted, a call cannot be cancelled.

:class:`ThreadDispatcher` runs calls on a thread pool. Anything with a
``submit(action, prepared_body)`` method can be used instead (a task queue
producer, for example); bodies produced by :func:`prepare_async_args` are
already prepared, so a worker only needs
:meth:`~botapi.client.bot_client.BotClient.perform`.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Mapping, Optional, Protocol

from botapi.client.body import prepare_body
from botapi.client.bot_client import BotClient
from botapi.output import debug, warning


class Dispatcher(Protocol):
    def submit(self, action: str, prepared_body: dict[str, Any]) -> None: ...


def prepare_async_args(action: Any, body: Optional[Mapping[str, Any]] = None) -> tuple[str, dict[str, Any]]:
    """Return the ``(action, prepared_body)`` pair handed to a dispatcher."""
    return str(action), prepare_body(body)


class ThreadDispatcher:
    """Performs submitted calls on a :class:`~concurrent.futures.ThreadPoolExecutor`.

    Results are written to the debug channel; failures (API errors and
    transport errors alike) are reported as warnings and otherwise dropped.

    Args:
        client: Client whose :meth:`~BotClient.perform` executes the calls.
        max_workers: Size of the worker pool.
    """

    def __init__(self, client: BotClient, max_workers: int = 4) -> None:
        self._client = client
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="botapi-dispatch"
        )

    def __enter__(self) -> ThreadDispatcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown(wait=True)

    def submit(self, action: str, prepared_body: dict[str, Any]) -> None:
        future = self._executor.submit(self._client.perform, action, prepared_body)
        future.add_done_callback(lambda f: self._report(action, f))

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting calls; with *wait*, block until queued calls finish."""
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _report(action: str, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            warning(f"Deferred {action} failed: {exc}")
        else:
            debug(f"Deferred {action} -> {future.result()}")
