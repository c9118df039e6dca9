"""ircb: an asyncio IRC client.

Typical use::

    client = IRCClient(host="irc.libera.chat", secure=True, nick="ircb-bot",
                       username="ircb", realName="ircb bot", channels=["#ircb"])
    client.events.on("message", lambda sender, target, text: ...)
    await client.connect()
"""

from .config import ConnectionConfig, load_config
from .errors import ConfigError, InternalError, NetworkError, NotConnectedError
from .irc import IRCClient

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConnectionConfig",
    "IRCClient",
    "InternalError",
    "NetworkError",
    "NotConnectedError",
    "load_config",
]
