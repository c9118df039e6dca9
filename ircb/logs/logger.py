"""Event-oriented logger used by every ircb module."""

from __future__ import annotations

import logging
import os

from .event_catalog import EVENT_TEMPLATES

PREFIX_WIDTH = 20
EVENT_COLUMN_WIDTH = 28


def _debug_format_enabled() -> bool:
    return os.environ.get("DEBUG", "false").strip().lower() in ("true", "1", "yes")


def _render(domain: str, action: str, context: dict[str, object]) -> str:
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
    try:
        return template.format(**context)
    except (KeyError, IndexError, ValueError):
        # Missing context keys leave the raw template
        return template


def _who(nick: object, channel: object) -> str:
    label = nick if isinstance(nick, str) and nick else "ircb"
    if isinstance(channel, str) and channel:
        label = f"{label}@{channel}"
    return f"[{label[:PREFIX_WIDTH]:<{PREFIX_WIDTH}}]"


class IRCLogger:
    """Emits ``domain_action`` events through a stdlib logger.

    Handlers are configured by the application (``ircb.logging_config``);
    this class only shapes messages. ``nick`` and ``channel`` keyword
    arguments become the bracketed prefix, the remaining keywords fill the
    event template and, in debug format, are appended as ``key=value``.
    """

    def __init__(self, name: str = "ircb") -> None:
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **context: object,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        text = human if human is not None else _render(domain, action, context)
        extra = dict(context)
        who = _who(extra.pop("nick", None), extra.pop("channel", None))
        if _debug_format_enabled():
            name = f"{domain}_{action}".lower()
            if len(name) > EVENT_COLUMN_WIDTH:
                name = name[: EVENT_COLUMN_WIDTH - 1] + "…"
            line = f"{name:<{EVENT_COLUMN_WIDTH}} {who} {text}"
            if extra:
                line += " (" + ", ".join(f"{k}={v}" for k, v in extra.items()) + ")"
        else:
            line = f"{who} {text}"
        self.logger.log(level, line, exc_info=exc_info)


logger = IRCLogger()
