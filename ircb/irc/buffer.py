"""Reassembly of protocol lines from arbitrarily chunked stream data."""

from __future__ import annotations

from ..constants import LINE_TERMINATOR


class LineBuffer:
    """Carries partial lines between transport reads.

    ``feed`` returns only complete, non-empty lines in arrival order; the
    text after the last terminator is kept until the next chunk arrives.
    """

    def __init__(self, terminator: str = LINE_TERMINATOR) -> None:
        self.terminator = terminator
        self._pending = ""

    @property
    def pending(self) -> str:
        return self._pending

    def feed(self, chunk: str) -> list[str]:
        data = self._pending + chunk
        *lines, self._pending = data.split(self.terminator)
        return [line for line in lines if line]

    def clear(self) -> None:
        self._pending = ""
