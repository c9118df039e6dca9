"""Error hierarchy and structured error reporting helpers."""

from .handling import as_network_error, is_retryable_error, log_error
from .internal import ConfigError, InternalError, NetworkError, NotConnectedError

__all__ = [
    "ConfigError",
    "InternalError",
    "NetworkError",
    "NotConnectedError",
    "as_network_error",
    "is_retryable_error",
    "log_error",
]
