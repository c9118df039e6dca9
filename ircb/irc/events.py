"""Event subscription and dispatch owned by the client through composition."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from ..logs.logger import logger

Listener = Callable[..., Any]

DATA_EVENT = "data"


class EventEmitter:
    """Named-event registry with sync and coroutine listeners.

    Listeners run synchronously inside ``emit`` in registration order.
    Coroutine listeners are scheduled as tasks on the running loop. A
    listener that raises is logged and never interrupts the emitter.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._tasks: set[asyncio.Task] = set()

    def on(self, event: str, listener: Listener) -> Listener:
        self._listeners[event].append(listener)
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        """Register ``listener`` for the next ``event`` only.

        ``off(event, listener)`` removes it before it fires.
        """

        def _once(*args: Any) -> Any:
            self.off(event, _once)
            return listener(*args)

        _once.once_of = listener  # type: ignore[attr-defined]
        return self.on(event, _once)

    def off(self, event: str, listener: Listener) -> None:
        """Remove the first registration of ``listener``, including via ``once``."""
        listeners = self._listeners.get(event)
        if not listeners:
            return
        for index, registered in enumerate(listeners):
            if registered == listener or getattr(registered, "once_of", None) == listener:
                del listeners[index]
                break
        else:
            return
        if not listeners:
            del self._listeners[event]

    def listeners(self, event: str) -> list[Listener]:
        return list(self._listeners.get(event, ()))

    def has_listeners(self, event: str) -> bool:
        return bool(self._listeners.get(event))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of ``event``; return whether any existed."""
        listeners = self.listeners(event)
        for listener in listeners:
            self._call(event, listener, args)
        return bool(listeners)

    def trigger(self, event: str, *args: Any) -> None:
        """Emit ``event`` when it has listeners, and always emit it on ``data``."""
        if self.has_listeners(event):
            self.emit(event, *args)
        self.emit(DATA_EVENT, event, *args)

    def _call(self, event: str, listener: Listener, args: tuple[Any, ...]) -> None:
        try:
            result = listener(*args)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(lambda t: self._task_done(event, t))
        except Exception as e:  # noqa: BLE001
            self._log_listener_error(event, e)

    def _task_done(self, event: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._log_listener_error(event, error)

    @staticmethod
    def _log_listener_error(event: str, error: BaseException) -> None:
        logger.log_event(
            "irc",
            "listener_error",
            level=logging.ERROR,
            event=event,
            error=str(error),
            error_type=type(error).__name__,
        )
