"""Async IRC client: transport ownership, command writer and public API."""

from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import Callable, Iterable
from typing import Any

from ..config.model import ConnectionConfig
from ..constants import DEFAULT_QUIT_MESSAGE, IRC_CONNECT_TIMEOUT, LINE_TERMINATOR
from ..errors.handling import as_network_error, log_error
from ..errors.internal import NotConnectedError
from ..logs.logger import logger
from .dispatcher import IRCDispatcher
from .events import EventEmitter
from .listener import IRCListener
from .registration import IRCRegistration, RegistrationState
from .session import SessionState


def _as_list(channels: str | Iterable[str]) -> list[str]:
    if isinstance(channels, str):
        return [channels]
    return list(channels)


class IRCClient:  # pylint: disable=too-many-instance-attributes
    """One connection to one IRC server.

    Events are published on ``client.events`` (see ``EventEmitter``): every
    event is also re-emitted on ``data`` with its name prepended. Command
    coroutines return once the line has been flushed to the transport and
    raise ``NetworkError`` when the write fails.
    """

    def __init__(self, config: ConnectionConfig | None = None, **options: Any):
        self.config = config if config is not None else ConnectionConfig(**options)
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.events = EventEmitter()
        self.session = SessionState(current_nick=self.config.nick)
        self.dispatcher = IRCDispatcher(self)
        self.registration = IRCRegistration(self)
        self.listener = IRCListener(self)
        self._listener_task: asyncio.Task | None = None
        self._registration_task: asyncio.Task | None = None
        self._closed = True

    # -- state -------------------------------------------------------------

    @property
    def nick(self) -> str | None:
        return self.session.current_nick

    @property
    def channels(self) -> set[str]:
        return set(self.session.channels)

    @property
    def motd(self) -> str | None:
        return self.session.motd

    @property
    def connected(self) -> bool:
        return not self._closed and self.writer is not None

    @property
    def registration_state(self) -> RegistrationState:
        return self.registration.state

    # -- connection --------------------------------------------------------

    def _build_ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self.config.reject_unauthorized:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            logger.log_event(
                "irc", "tls_unverified", level=logging.WARNING, host=self.config.host
            )
        return context

    async def connect(self) -> bool:
        """Open the transport and start listening and registering.

        Returns False when the connection could not be established; the
        failure is also reported through the ``error`` and ``close`` events.
        """
        cfg = self.config
        logger.log_event(
            "irc",
            "connect_start",
            nick=cfg.nick,
            host=cfg.host,
            port=cfg.port,
            secure=cfg.secure,
        )
        ssl_context = self._build_ssl_context() if cfg.secure else None
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(cfg.host, cfg.port, ssl=ssl_context),
                timeout=IRC_CONNECT_TIMEOUT,
            )
        except (OSError, TimeoutError) as e:
            error = as_network_error(e, "connect")
            logger.log_event(
                "irc",
                "connect_failed",
                level=logging.ERROR,
                nick=cfg.nick,
                host=cfg.host,
                port=cfg.port,
                error=str(e) or type(e).__name__,
            )
            self.events.trigger("error", error)
            self.events.trigger("close", True)
            return False

        self._closed = False
        logger.log_event("irc", "connect_success", nick=cfg.nick, host=cfg.host, port=cfg.port)
        self.events.trigger("connect")
        motd_received = self.wait_for_event("motd")
        self._listener_task = asyncio.ensure_future(self.listener.listen())
        self._registration_task = asyncio.ensure_future(self.registration.run(motd_received))
        self._registration_task.add_done_callback(self._registration_done)
        return True

    def _registration_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.log_event(
                "registration", "failed", level=logging.ERROR, nick=self.nick, error=str(error)
            )
            self.events.trigger("error", error)

    async def wait_closed(self) -> None:
        """Wait until the listener has stopped."""
        if self._listener_task is not None:
            await asyncio.gather(self._listener_task, return_exceptions=True)

    def _handle_closed(self, had_error: bool) -> None:
        if self._closed:
            return
        self._closed = True
        writer = self.writer
        self.reader = None
        self.writer = None
        if writer is not None:
            writer.close()
        if self._registration_task is not None and not self._registration_task.done():
            self._registration_task.cancel()
        self.session.reset()
        self.dispatcher.buffer.clear()
        self.registration.reset()
        logger.log_event("irc", "closed", nick=self.nick, had_error=had_error)
        self.events.trigger("close", had_error)

    async def close(self) -> None:
        """Close the transport without sending QUIT."""
        writer = self.writer
        task = self._listener_task
        self._handle_closed(False)
        if writer is not None:
            try:
                await writer.wait_closed()
            except (OSError, ConnectionError) as e:
                log_error("Closing transport failed", e, context={"nick": self.nick})
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    # -- writing -----------------------------------------------------------

    def send_line(self, line: str) -> None:
        """Queue one line on the transport without waiting for the flush."""
        if self.writer is None or self._closed:
            raise NotConnectedError()
        shown = "PASS ****" if line.startswith("PASS ") else line
        logger.log_event("irc", "send", level=logging.DEBUG, nick=self.nick, line=shown)
        self.writer.write(f"{line}{LINE_TERMINATOR}".encode())

    async def write(self, line: str) -> None:
        """Write one line and wait until the transport has accepted it."""
        self.send_line(line)
        try:
            await self.writer.drain()  # type: ignore[union-attr]
        except (OSError, ConnectionError) as e:
            logger.log_event(
                "irc", "send_failed", level=logging.ERROR, nick=self.nick, error=str(e)
            )
            raise as_network_error(e, "write") from e

    def wait_for_event(
        self, event: str, predicate: Callable[..., bool] | None = None
    ) -> asyncio.Future:
        """Return a future resolved with the payload of the next matching event.

        The listener is removed as soon as the future is done, including
        when the caller cancels it.
        """
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def _listener(*args: Any) -> None:
            if future.done():
                return
            if predicate is None or predicate(*args):
                future.set_result(args)

        self.events.on(event, _listener)
        future.add_done_callback(lambda _f: self.events.off(event, _listener))
        return future

    # -- commands ----------------------------------------------------------

    async def pass_(self, password: str) -> None:
        await self.write(f"PASS {password}")

    async def set_nick(self, nick: str) -> None:
        await self.write(f"NICK {nick}")

    async def set_user(self, username: str, real_name: str) -> None:
        await self.write(f"USER {username} 0 * :{real_name}")

    async def say(self, target: str, text: str) -> None:
        await self.write(f"PRIVMSG {target} :{text}")

    async def join(self, channels: str | Iterable[str]) -> None:
        await self.write(f"JOIN {','.join(_as_list(channels))}")

    async def part(self, channels: str | Iterable[str], message: str = "") -> None:
        await self.write(f"PART {','.join(_as_list(channels))} :{message}")

    leave = part

    async def kick(self, channel: str, nick: str, message: str | None = None) -> None:
        if message is None:
            message = nick
        await self.write(f"KICK {channel} {nick} :{message}")

    async def names(self, channel: str) -> list[str]:
        """Request the member list of ``channel``.

        Waits for the aggregated ``names`` event of that channel; there is
        no timeout, wrap the call in ``asyncio.wait_for`` if one is needed.
        """
        reply = self.wait_for_event("names", lambda name, _nicks: name == channel)
        logger.log_event("names", "request", level=logging.DEBUG, nick=self.nick, channel=channel)
        try:
            await self.write(f"NAMES {channel}")
            _, nicks = await reply
        finally:
            if not reply.done():
                reply.cancel()
        logger.log_event(
            "names", "complete", level=logging.DEBUG, nick=self.nick, channel=channel, count=len(nicks)
        )
        return list(nicks)

    async def quit(self, message: str | None = None) -> None:
        await self.write(f"QUIT :{message or DEFAULT_QUIT_MESSAGE}")

    async def end(self, message: str | None = None) -> None:
        """Send QUIT, then close the transport."""
        try:
            await self.quit(message)
        finally:
            await self.close()


__all__ = ["IRCClient"]
