import asyncio
from typing import Any

import pytest

from ircb.irc.events import DATA_EVENT, EventEmitter


def test_emit_calls_listeners_in_order():
    emitter = EventEmitter()
    calls: list[str] = []
    emitter.on("x", lambda v: calls.append(f"a{v}"))
    emitter.on("x", lambda v: calls.append(f"b{v}"))
    assert emitter.emit("x", 1) is True
    assert calls == ["a1", "b1"]


def test_emit_without_listeners_returns_false():
    assert EventEmitter().emit("nothing") is False


def test_once_listener_fires_a_single_time():
    emitter = EventEmitter()
    calls: list[int] = []
    emitter.once("x", calls.append)
    emitter.emit("x", 1)
    emitter.emit("x", 2)
    assert calls == [1]
    assert not emitter.has_listeners("x")


def test_off_removes_listener_and_ignores_unknown():
    emitter = EventEmitter()
    calls: list[int] = []
    emitter.on("x", calls.append)
    emitter.off("x", calls.append)
    emitter.off("x", calls.append)
    emitter.off("y", calls.append)
    emitter.emit("x", 1)
    assert calls == []


def test_trigger_always_reaches_data_tap():
    emitter = EventEmitter()
    tap: list[tuple[Any, ...]] = []
    emitter.on(DATA_EVENT, lambda *args: tap.append(args))
    emitter.trigger("join", "alice!a@h", "#c")
    assert tap == [("join", "alice!a@h", "#c")]


def test_trigger_calls_specific_listener_then_data():
    emitter = EventEmitter()
    order: list[str] = []
    emitter.on("join", lambda *args: order.append("join"))
    emitter.on(DATA_EVENT, lambda *args: order.append("data"))
    emitter.trigger("join", "p", "#c")
    assert order == ["join", "data"]


def test_listener_exception_does_not_stop_other_listeners():
    emitter = EventEmitter()
    calls: list[str] = []

    def bad(*_args):
        raise RuntimeError("boom")

    emitter.on("x", bad)
    emitter.on("x", lambda: calls.append("ok"))
    emitter.emit("x")
    assert calls == ["ok"]


def test_off_removes_a_once_listener_by_its_original_callable():
    emitter = EventEmitter()
    calls: list[int] = []
    emitter.once("x", calls.append)
    emitter.off("x", calls.append)
    assert not emitter.has_listeners("x")
    emitter.emit("x", 1)
    assert calls == []


def test_off_removes_only_the_first_registration():
    emitter = EventEmitter()
    calls: list[int] = []
    emitter.on("x", calls.append)
    emitter.on("x", calls.append)
    emitter.off("x", calls.append)
    emitter.emit("x", 1)
    assert calls == [1]


@pytest.mark.asyncio
async def test_coroutine_listener_is_scheduled():
    emitter = EventEmitter()
    seen: list[str] = []

    async def handler(value: str) -> None:
        await asyncio.sleep(0)
        seen.append(value)

    emitter.on("x", handler)
    emitter.emit("x", "hello")
    assert seen == []
    await asyncio.sleep(0.01)
    assert seen == ["hello"]


@pytest.mark.asyncio
async def test_coroutine_listener_error_is_logged(monkeypatch):
    from ircb.logs.logger import logger as irc_logger

    emitter = EventEmitter()
    seen: list[str] = []
    real_log_event = irc_logger.log_event

    def capture(domain: str, action: str, **kwargs: Any) -> None:
        if action == "listener_error":
            seen.append(kwargs["event"])
        real_log_event(domain, action, **kwargs)

    monkeypatch.setattr(irc_logger, "log_event", capture)

    async def bad_handler() -> None:
        raise RuntimeError("boom")

    emitter.on("x", bad_handler)
    emitter.emit("x")
    await asyncio.sleep(0.01)
    assert seen == ["x"]
