"""
Root logging setup (colorlog) and categorized error reporting for ircb.
"""

import logging
import os
import sys
import threading
import time
from collections import Counter, deque
from typing import Any

import colorlog

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s"
DATE_FORMAT = "%H:%M:%S"
LEVEL_COLORS = {
    "DEBUG": "thin_white",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}
# Only problems get a colored message body
MESSAGE_COLORS = {"WARNING": "yellow", "ERROR": "red", "CRITICAL": "bold_red"}


class ErrorAggregator:
    """Counts errors per category and keeps the most recent ones.

    Counts are totals since the last ``clear()``; only the last
    ``max_recent`` entries of each category are retained.
    """

    def __init__(self, max_recent: int = 100):
        self.max_recent = max_recent
        self._counts: Counter[str] = Counter()
        self._recent: dict[str, deque[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def record(self, category: str, message: str, context: dict[str, Any] | None = None) -> None:
        entry = {"time": time.time(), "message": message, "context": dict(context or {})}
        with self._lock:
            self._counts[category] += 1
            self._recent.setdefault(category, deque(maxlen=self.max_recent)).append(entry)

    def summary(self) -> dict[str, dict[str, Any]]:
        """Return ``{category: {"count", "last", "recent"}}``."""
        with self._lock:
            return {
                category: {
                    "count": count,
                    "last": self._recent[category][-1],
                    "recent": list(self._recent[category]),
                }
                for category, count in self._counts.items()
            }

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()
            self._recent.clear()


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``message`` under a category tag and count it.

    The line reads ``[CATEGORY] message | ExcType: text | k=v, ...``.
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"{type(exception).__name__}: {exception}")
    if context:
        parts.append(", ".join(f"{key}={value}" for key, value in context.items()))
    logging.getLogger("ircb").log(level, " | ".join(parts))
    error_aggregator.record(error_type, message, context)


class LoggerConfigurator:
    """Installs one colored stderr handler on the root logger."""

    def __init__(self, config=None):
        # Recognized keys: "debug" (bool)
        self.config = config or {}

    def level(self) -> int:
        if self.config.get("debug"):
            return logging.DEBUG
        if os.environ.get("DEBUG", "").strip().lower() in ("true", "1", "yes"):
            return logging.DEBUG
        return logging.INFO

    def configure(self) -> int:
        """Replace root handlers and return the level in effect."""
        level = self.level()
        handler = colorlog.StreamHandler(sys.stderr)
        handler.setFormatter(
            colorlog.ColoredFormatter(
                LOG_FORMAT,
                datefmt=DATE_FORMAT,
                log_colors=LEVEL_COLORS,
                secondary_log_colors={"message": MESSAGE_COLORS},
            )
        )
        logging.basicConfig(level=level, handlers=[handler], force=True)
        # asyncio logs every slow callback at DEBUG which drowns protocol traffic
        logging.getLogger("asyncio").setLevel(logging.INFO)
        return level
