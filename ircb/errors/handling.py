from __future__ import annotations

import ssl

# Import structured logging
from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    InternalError,
    NetworkError,
)


def log_error(message: str, error: BaseException, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized from its type and forwarded to structured
    logging so repeated failures are aggregated per category.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, ssl.SSLError):
        error_type = "tls"
    elif isinstance(error, NetworkError | OSError | ConnectionError):
        error_type = "network"
    elif isinstance(error, ConfigError):
        error_type = "config"
    elif isinstance(error, InternalError):
        error_type = "internal"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


def as_network_error(error: BaseException, context: str) -> NetworkError:
    """Wrap a raw transport exception into a NetworkError.

    NetworkError instances are returned unchanged so wrapping is idempotent.
    """
    if isinstance(error, NetworkError):
        return error
    wrapped = NetworkError(
        f"Transport failure during {context}: {error}",
        data={"operation": context, "error_type": type(error).__name__},
    )
    wrapped.__cause__ = error
    return wrapped


def is_retryable_error(error: BaseException) -> bool:
    """Check if an exception should trigger a reconnect attempt."""
    return isinstance(error, NetworkError | OSError | ConnectionError | TimeoutError)
