"""Message dispatch: parsed lines -> session state updates and events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..logs.logger import logger
from .buffer import LineBuffer
from .parser import IRCMessage, extract_identity, parse_irc_message
from .replies import reply_name

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient
    from .session import SessionState


class IRCDispatcher:
    def __init__(self, client: IRCClient):
        self.client = client
        self.buffer = LineBuffer()
        self._handlers: dict[str, Callable[[IRCMessage], None]] = {
            "RPL_WELCOME": self._handle_welcome,
            "NICK": self._handle_nick,
            "PING": self._handle_ping,
            "JOIN": self._handle_join,
            "PART": self._handle_part,
            "KICK": self._handle_kick,
            "RPL_MOTD": self._handle_motd_line,
            "RPL_ENDOFMOTD": self._handle_end_of_motd,
            "ERR_NOMOTD": self._handle_no_motd,
            "PRIVMSG": self._handle_privmsg,
            "RPL_NAMREPLY": self._handle_names_reply,
            "RPL_ENDOFNAMES": self._handle_end_of_names,
        }

    @property
    def session(self) -> SessionState:
        return self.client.session

    def process_incoming_data(self, new_data: str) -> None:
        """Dispatch every complete line in ``new_data``, in order."""
        for line in self.buffer.feed(new_data):
            self.handle_line(line)

    def handle_line(self, raw_message: str) -> None:
        logger.log_event(
            "irc",
            "raw",
            level=logging.DEBUG,
            nick=self.session.current_nick,
            line=raw_message,
        )
        parsed = parse_irc_message(raw_message)
        self.handle_message(parsed)

    def handle_message(self, parsed: IRCMessage) -> None:
        command = reply_name(parsed.command)
        if not command:
            logger.log_event(
                "irc",
                "unknown_command",
                level=logging.DEBUG,
                nick=self.session.current_nick,
                raw=parsed.raw,
            )
            return
        handler = self._handlers.get(command)
        if handler is None:
            self._handle_generic(command, parsed)
        else:
            handler(parsed)

    def _trigger(self, event: str, *args) -> None:
        self.client.events.trigger(event, *args)

    def _handle_welcome(self, parsed: IRCMessage) -> None:
        if parsed.middle:
            self.session.current_nick = parsed.middle[0]
            logger.log_event("irc", "welcome", nick=self.session.current_nick)

    def _handle_nick(self, parsed: IRCMessage) -> None:
        old_nick = extract_identity(parsed.prefix)
        new_nick = parsed.trailing or (parsed.middle[0] if parsed.middle else "")
        if self.session.is_self(old_nick) and new_nick:
            self.session.current_nick = new_nick
            logger.log_event("irc", "nick_changed", nick=old_nick, new_nick=new_nick)
        self._trigger("nick", old_nick, new_nick)

    def _handle_ping(self, parsed: IRCMessage) -> None:
        server = parsed.trailing or (parsed.middle[0] if parsed.middle else "")
        self.client.send_line(f"PONG :{server}")
        logger.log_event("irc", "pong", level=logging.DEBUG, server=server)

    def _handle_join(self, parsed: IRCMessage) -> None:
        channel = parsed.middle[0] if parsed.middle else parsed.trailing
        self._trigger("join", parsed.prefix, channel)
        if channel and self.session.is_self(extract_identity(parsed.prefix)):
            if self.session.add_channel(channel):
                logger.log_event(
                    "irc", "channel_joined", nick=self.session.current_nick, channel=channel
                )

    def _handle_part(self, parsed: IRCMessage) -> None:
        channel = parsed.middle[0] if parsed.middle else ""
        self._trigger("part", parsed.prefix, channel, parsed.trailing)
        if self.session.is_self(extract_identity(parsed.prefix)):
            if self.session.remove_channel(channel):
                logger.log_event(
                    "irc", "channel_left", nick=self.session.current_nick, channel=channel
                )

    def _handle_kick(self, parsed: IRCMessage) -> None:
        channel = parsed.middle[0] if parsed.middle else ""
        kicked = parsed.middle[1] if len(parsed.middle) > 1 else ""
        self._trigger("kick", parsed.prefix, channel, kicked, parsed.trailing)
        # Membership follows the kicked nick, not the kicker.
        if self.session.is_self(kicked):
            if self.session.remove_channel(channel):
                logger.log_event(
                    "irc",
                    "channel_kicked",
                    level=logging.WARNING,
                    nick=self.session.current_nick,
                    channel=channel,
                    kicker=extract_identity(parsed.prefix),
                )

    def _handle_motd_line(self, parsed: IRCMessage) -> None:
        self.session.append_motd(parsed.trailing)

    def _handle_end_of_motd(self, parsed: IRCMessage) -> None:  # noqa: ARG002
        self._trigger("motd", self.session.finish_motd())

    def _handle_no_motd(self, parsed: IRCMessage) -> None:  # noqa: ARG002
        self._trigger("motd", None)

    def _handle_privmsg(self, parsed: IRCMessage) -> None:
        target = parsed.middle[0] if parsed.middle else ""
        self._trigger("message", extract_identity(parsed.prefix), target, parsed.trailing)

    def _handle_names_reply(self, parsed: IRCMessage) -> None:
        # RPL_NAMREPLY: <client> <symbol> <channel> :<nicks>
        if len(parsed.middle) < 3:
            return
        channel = parsed.middle[2]
        self.session.add_names(channel, parsed.trailing.split())

    def _handle_end_of_names(self, parsed: IRCMessage) -> None:
        # RPL_ENDOFNAMES: <client> <channel> :End of /NAMES list
        if len(parsed.middle) < 2:
            return
        channel = parsed.middle[1]
        nicks = self.session.pop_names(channel)
        if nicks is not None:
            self._trigger("names", channel, nicks)

    def _handle_generic(self, command: str, parsed: IRCMessage) -> None:
        target = parsed.middle[0] if parsed.middle else None
        self._trigger(command.lower(), target, parsed.trailing)
