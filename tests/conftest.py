import os

import pytest

from ircb.irc.client import IRCClient
from ircb.logging_config import error_aggregator

# Keep log output concise regardless of the developer's shell
os.environ.setdefault("DEBUG", "false")


class FakeWriter:
    """Stands in for asyncio.StreamWriter and records every written line."""

    def __init__(self) -> None:
        self.data = b""
        self.closed = False
        self.drain_error: BaseException | None = None
        self.drain_calls = 0

    def write(self, data: bytes) -> None:
        self.data += data

    async def drain(self) -> None:
        self.drain_calls += 1
        if self.drain_error is not None:
            raise self.drain_error

    def close(self) -> None:
        self.closed = True

    def is_closing(self) -> bool:
        return self.closed

    async def wait_closed(self) -> None:
        return None

    @property
    def lines(self) -> list[str]:
        return [line for line in self.data.decode("utf-8").split("\r\n") if line]


def attach(client: IRCClient, writer: FakeWriter | None = None) -> FakeWriter:
    """Give ``client`` an open fake transport without a listener task."""
    writer = writer or FakeWriter()
    client.writer = writer  # type: ignore[assignment]
    client._closed = False  # noqa: SLF001
    return writer


class Recorder:
    """Collects (event, *payload) tuples from the ``data`` tap."""

    def __init__(self, client: IRCClient) -> None:
        self.events: list[tuple] = []
        client.events.on("data", self)

    def __call__(self, *args) -> None:
        self.events.append(args)

    def names(self) -> list[str]:
        return [e[0] for e in self.events]


@pytest.fixture
def fake_writer() -> FakeWriter:
    return FakeWriter()


@pytest.fixture
def client(fake_writer) -> IRCClient:
    c = IRCClient(host="irc.example.org", nick="tester")
    attach(c, fake_writer)
    return c


@pytest.fixture
def recorder(client) -> Recorder:
    return Recorder(client)


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    yield
    error_aggregator.clear()
