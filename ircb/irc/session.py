"""Per-connection session state mutated by the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class SessionState:
    current_nick: str | None = None
    channels: set[str] = field(default_factory=set)
    motd_buffer: str = ""
    motd: str | None = None
    names_in_progress: dict[str, list[str]] = field(default_factory=dict)

    def is_self(self, nick: str | None) -> bool:
        return bool(nick) and nick == self.current_nick

    def add_channel(self, channel: str) -> bool:
        if channel in self.channels:
            return False
        self.channels.add(channel)
        return True

    def remove_channel(self, channel: str) -> bool:
        if channel not in self.channels:
            return False
        self.channels.discard(channel)
        return True

    def append_motd(self, line: str) -> None:
        self.motd_buffer += line + "\n"

    def finish_motd(self) -> str:
        """Close the current MOTD sequence and return its text."""
        self.motd = self.motd_buffer
        self.motd_buffer = ""
        return self.motd

    def add_names(self, channel: str, nicks: list[str]) -> None:
        self.names_in_progress.setdefault(channel, []).extend(nicks)

    def pop_names(self, channel: str) -> list[str] | None:
        return self.names_in_progress.pop(channel, None)

    def reset(self) -> None:
        self.channels.clear()
        self.motd_buffer = ""
        self.names_in_progress.clear()
