"""Exception types raised by ircb.

Raw ``OSError`` / ``ssl.SSLError`` from asyncio are wrapped at the client
boundary, so callers only handle these:

  InternalError      - root, carries a ``data`` dict with context
  NetworkError       - connect, read or write failed
  NotConnectedError  - a command was issued without an open transport
  ConfigError        - connection options could not be loaded or validated
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Root of the ircb error hierarchy.

    ``data`` holds structured context (operation, path, attempts...) for
    logging; it is always a fresh dict.
    """

    data: dict[str, object]

    def __init__(self, message: str, *, data: Mapping[str, object] | None = None) -> None:
        super().__init__(message)
        self.data = dict(data or {})


class NetworkError(InternalError):
    """The transport failed; the connection is usually unusable afterwards.

    Reconnecting is left to the caller (see ``ircb.utils.retry``).
    """


class NotConnectedError(NetworkError):
    def __init__(self, message: str = "Not connected") -> None:
        super().__init__(message)


class ConfigError(InternalError):
    """Invalid or unreadable connection options."""


__all__ = ["ConfigError", "InternalError", "NetworkError", "NotConnectedError"]
