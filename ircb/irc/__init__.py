"""IRC subsystem package.

Contains the tokenizer, reply table, line buffer, event emitter, session
state, dispatcher, registration handshake, listener loop and the client
that ties them together.
"""

from .buffer import LineBuffer  # noqa: F401
from .client import IRCClient  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .events import DATA_EVENT, EventEmitter  # noqa: F401
from .listener import IRCListener  # noqa: F401
from .parser import IRCMessage, extract_identity, parse_irc_message  # noqa: F401
from .registration import IRCRegistration, RegistrationState  # noqa: F401
from .replies import REPLIES, reply_name  # noqa: F401
from .session import SessionState  # noqa: F401

__all__ = [
    "DATA_EVENT",
    "EventEmitter",
    "IRCClient",
    "IRCDispatcher",
    "IRCListener",
    "IRCMessage",
    "IRCRegistration",
    "LineBuffer",
    "REPLIES",
    "RegistrationState",
    "SessionState",
    "extract_identity",
    "parse_irc_message",
    "reply_name",
]
