"""Utility package: caller-side helpers that sit outside the client core."""

from .retry import RetryExhaustedError, connect_with_retry

__all__ = ["RetryExhaustedError", "connect_with_retry"]
