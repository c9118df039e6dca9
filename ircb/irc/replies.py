"""Numeric reply table (RFC 1459 / RFC 2812), loaded from ``replies.json``."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

_JSON_FILENAME = "replies.json"


def _load_replies() -> dict[str, dict[str, str]]:
    path = Path(__file__).with_name(_JSON_FILENAME)
    with path.open("r", encoding="utf-8") as f:
        raw: Any = json.load(f)
    replies: dict[str, dict[str, str]] = {}
    if isinstance(raw, Mapping):
        for code, entry in raw.items():
            if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
                replies[str(code)] = dict(entry)
    return replies


REPLIES: dict[str, dict[str, str]] = _load_replies()


def reply_name(command: str | None) -> str | None:
    """Map a numeric reply code to its mnemonic, other commands pass through.

    ``"376"`` becomes ``"RPL_ENDOFMOTD"``; ``"PRIVMSG"`` and unknown numerics
    are returned unchanged.
    """
    if command is None:
        return None
    reply = REPLIES.get(command)
    return reply["name"] if reply else command


__all__ = ["REPLIES", "reply_name"]
