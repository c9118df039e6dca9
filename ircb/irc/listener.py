"""Listener loop: transport reads -> UTF-8 decode -> dispatcher."""

from __future__ import annotations

import codecs
import logging
from typing import TYPE_CHECKING

from ..constants import IRC_READ_CHUNK_SIZE
from ..errors.handling import as_network_error, log_error
from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCListener:
    """Owns the read loop and hands decoded text to the dispatcher."""

    def __init__(self, client: IRCClient, chunk_size: int = IRC_READ_CHUNK_SIZE):
        self.client = client
        self.chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    async def listen(self) -> None:
        """Read until EOF or a transport error, then close the client."""
        client = self.client
        reader = client.reader
        if reader is None:
            return
        logger.log_event("irc", "listener_start", level=logging.DEBUG, nick=client.nick)
        had_error = False
        try:
            while True:
                data = await reader.read(self.chunk_size)
                if not data:
                    logger.log_event("irc", "connection_lost", level=logging.WARNING, nick=client.nick)
                    break
                # The incremental decoder keeps multi-byte sequences cut between reads intact.
                text = self._decoder.decode(data)
                if text:
                    client.dispatcher.process_incoming_data(text)
        except (OSError, EOFError) as e:
            had_error = True
            logger.log_event(
                "irc", "read_error", level=logging.ERROR, nick=client.nick, error=str(e)
            )
            client.events.trigger("error", as_network_error(e, "read"))
        except Exception as e:
            had_error = True
            log_error("Listener failed", e, context={"nick": client.nick})
            client.events.trigger("error", e)
        finally:
            self._decoder.reset()
            logger.log_event("irc", "listener_stopped", level=logging.DEBUG, nick=client.nick)
            client._handle_closed(had_error)  # noqa: SLF001
