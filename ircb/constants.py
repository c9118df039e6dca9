"""
Defaults for the ircb IRC client.

Numeric values can be overridden through an environment variable of the
same name, e.g. ``IRC_CONNECT_TIMEOUT=5``.
"""

import os
from collections.abc import Callable
from typing import TypeVar

N = TypeVar("N", int, float)


def _from_env(name: str, default: N, cast: Callable[[str], N]) -> N:
    """Parse ``name`` from the environment, falling back to ``default``.

    Unparseable values are reported on stdout; logging is not configured
    yet when this module is imported.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        print(f"Warning: ignoring {name}={raw!r}, using {default}")
        return default


# Server defaults
DEFAULT_HOST = "irc.freenode.org"
DEFAULT_CHANNEL = "#ircb"  # Joined when connecting to DEFAULT_HOST without channels
IRC_PLAIN_PORT = _from_env("IRC_PLAIN_PORT", 6667, int)  # Plain TCP port
IRC_SECURE_PORT = _from_env("IRC_SECURE_PORT", 6697, int)  # TLS port

# Wire
LINE_TERMINATOR = "\r\n"
IRC_READ_CHUNK_SIZE = _from_env("IRC_READ_CHUNK_SIZE", 4096, int)  # Bytes per read()
IRC_CONNECT_TIMEOUT = _from_env("IRC_CONNECT_TIMEOUT", 30.0, float)  # Seconds for open_connection

# Quit
DEFAULT_QUIT_MESSAGE = "TTYL, if you also want a better IRC experience, checkout ircb"

# Caller-side reconnect (the client core never retries on its own)
RETRY_MAX_ATTEMPTS = _from_env("RETRY_MAX_ATTEMPTS", 5, int)  # Connect attempts in the CLI
RETRY_MAX_WAIT = _from_env("RETRY_MAX_WAIT", 60, int)  # Upper bound for backoff seconds
