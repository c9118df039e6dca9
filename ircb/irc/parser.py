"""IRC line tokenizer and prefix helpers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class IRCMessage:
    raw: str
    prefix: str
    command: str | None
    middle: list[str] = field(default_factory=list)
    trailing: str = ""
    tags: dict[str, str] = field(default_factory=dict)


def parse_irc_message(raw_line: str) -> IRCMessage:
    """Split one protocol line (without terminator) into its parts.

    ``:nick!user@host PRIVMSG #chan :hello there`` becomes prefix
    ``nick!user@host``, command ``PRIVMSG``, middle ``["#chan"]`` and
    trailing ``hello there``. A line without a command token yields
    ``command=None``.
    """
    tags: dict[str, str] = {}
    prefix = ""
    trailing = ""

    original = raw_line
    raw_line = raw_line.lstrip(" ")

    if raw_line.startswith("@"):
        tags_part, _, raw_line = raw_line.partition(" ")
        tags = _parse_tags(tags_part[1:])
        raw_line = raw_line.lstrip(" ")

    if raw_line.startswith(":"):
        # Malformed lines may omit the space after the prefix
        prefix, _, raw_line = raw_line[1:].partition(" ")

    if raw_line.startswith(":"):
        raw_line, trailing = "", raw_line[1:]
    elif " :" in raw_line:
        raw_line, trailing = raw_line.split(" :", 1)

    parts = raw_line.split()
    command = parts[0] if parts else None
    middle = parts[1:]

    return IRCMessage(
        raw=original,
        prefix=prefix,
        command=command,
        middle=middle,
        trailing=trailing,
        tags=tags,
    )


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        k, _, v = tag.partition("=")
        tags[k] = v
    return tags


def extract_identity(prefix: str | None) -> str:
    """Return the nickname portion of a ``nick!user@host`` prefix.

    Server prefixes carry no ``!`` and are returned unchanged.
    """
    if not prefix:
        return ""
    return prefix.split("!", 1)[0]
