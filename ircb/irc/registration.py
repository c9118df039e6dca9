"""Connect-time registration handshake (PASS -> NICK -> USER -> MOTD -> JOIN)."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum, auto
from typing import TYPE_CHECKING

from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class RegistrationState(Enum):
    AWAITING_PASS = auto()
    AWAITING_NICK = auto()
    AWAITING_USER = auto()
    AWAITING_MOTD = auto()
    READY = auto()


class IRCRegistration:
    """Runs the handshake once per connection.

    Every step is skipped when its configuration is missing. The first three
    advance on write completion; the last one advances on the ``motd`` event,
    which the server sends with either the MOTD text or ``None``.
    """

    def __init__(self, client: IRCClient) -> None:
        self.client = client
        self.state = RegistrationState.AWAITING_PASS

    def _set_state(self, new_state: RegistrationState) -> None:
        if self.state != new_state:
            logger.log_event(
                "registration",
                "state_change",
                level=logging.DEBUG,
                nick=self.client.config.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def _skip(self, step: str) -> None:
        logger.log_event(
            "registration",
            "step_skipped",
            level=logging.DEBUG,
            nick=self.client.config.nick,
            step=step,
        )

    async def run(self, motd_received: asyncio.Future | None = None) -> None:
        """Run every step, then trigger ``ready``.

        ``motd_received`` lets the caller subscribe to ``motd`` before the
        transport starts delivering lines, so an early end-of-MOTD is not lost.
        """
        client = self.client
        config = client.config
        if motd_received is None:
            motd_received = client.wait_for_event("motd")
        try:
            self._set_state(RegistrationState.AWAITING_PASS)
            if config.password:
                await client.pass_(config.password)
            else:
                self._skip("pass")

            self._set_state(RegistrationState.AWAITING_NICK)
            if config.nick:
                await client.set_nick(config.nick)
            else:
                self._skip("nick")

            self._set_state(RegistrationState.AWAITING_USER)
            if config.username and config.real_name:
                await client.set_user(config.username, config.real_name)
            else:
                self._skip("user")

            self._set_state(RegistrationState.AWAITING_MOTD)
            (motd,) = await motd_received
            logger.log_event(
                "registration",
                "motd_received",
                level=logging.DEBUG,
                nick=client.nick,
                length=len(motd or ""),
            )
            if config.channels:
                await client.join(config.channels)
            else:
                self._skip("join")
        finally:
            if not motd_received.done():
                motd_received.cancel()

        self._set_state(RegistrationState.READY)
        logger.log_event("registration", "ready", nick=client.nick)
        client.events.trigger("ready")

    def reset(self) -> None:
        self.state = RegistrationState.AWAITING_PASS


__all__ = ["IRCRegistration", "RegistrationState"]
