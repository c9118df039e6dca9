"""
Tests for the command writer and request/response helpers of IRCClient
"""

import asyncio

import pytest

from ircb.constants import DEFAULT_QUIT_MESSAGE
from ircb.errors.internal import NetworkError, NotConnectedError
from ircb.irc.client import IRCClient


@pytest.mark.asyncio
async def test_say_formats_privmsg(client, fake_writer):
    await client.say("#python", "hello there")
    assert fake_writer.lines == ["PRIVMSG #python :hello there"]
    assert fake_writer.drain_calls == 1


@pytest.mark.asyncio
async def test_handshake_commands(client, fake_writer):
    await client.pass_("s3cret")
    await client.set_nick("tester")
    await client.set_user("tester", "Test User")
    assert fake_writer.lines == [
        "PASS s3cret",
        "NICK tester",
        "USER tester 0 * :Test User",
    ]


@pytest.mark.asyncio
async def test_join_accepts_one_or_many_channels(client, fake_writer):
    await client.join("#a")
    await client.join(["#a", "#b"])
    await client.join(("#c",))
    assert fake_writer.lines == ["JOIN #a", "JOIN #a,#b", "JOIN #c"]


@pytest.mark.asyncio
async def test_part_and_leave(client, fake_writer):
    await client.part("#a")
    await client.leave(["#a", "#b"], "see you")
    assert fake_writer.lines == ["PART #a :", "PART #a,#b :see you"]


@pytest.mark.asyncio
async def test_kick_defaults_message_to_nick(client, fake_writer):
    await client.kick("#a", "alice")
    await client.kick("#a", "bob", "spam")
    assert fake_writer.lines == ["KICK #a alice :alice", "KICK #a bob :spam"]


@pytest.mark.asyncio
async def test_quit_uses_default_message(client, fake_writer):
    await client.quit()
    await client.quit("bye")
    assert fake_writer.lines == [f"QUIT :{DEFAULT_QUIT_MESSAGE}", "QUIT :bye"]


@pytest.mark.asyncio
async def test_end_quits_then_closes(client, fake_writer, recorder):
    await client.end("later")
    assert fake_writer.lines == ["QUIT :later"]
    assert fake_writer.closed is True
    assert client.connected is False
    assert ("close", False) in recorder.events


@pytest.mark.asyncio
async def test_write_failure_raises_network_error(client, fake_writer):
    fake_writer.drain_error = ConnectionResetError("reset by peer")
    with pytest.raises(NetworkError) as exc_info:
        await client.say("#a", "hi")
    assert isinstance(exc_info.value.__cause__, ConnectionResetError)


@pytest.mark.asyncio
async def test_write_without_transport_raises_not_connected():
    client = IRCClient(host="irc.example.org", nick="tester")
    with pytest.raises(NotConnectedError):
        await client.say("#a", "hi")


@pytest.mark.asyncio
async def test_names_resolves_with_matching_channel(client, fake_writer):
    request = asyncio.ensure_future(client.names("#python"))
    await asyncio.sleep(0)
    assert fake_writer.lines == ["NAMES #python"]

    client.dispatcher.process_incoming_data(
        ":srv 353 tester = #other :zed\r\n"
        ":srv 366 tester #other :End of /NAMES list.\r\n"
        ":srv 353 tester = #python :alice bob\r\n"
        ":srv 353 tester = #python :carol\r\n"
        ":srv 366 tester #python :End of /NAMES list.\r\n"
    )
    assert await asyncio.wait_for(request, timeout=1) == ["alice", "bob", "carol"]
    assert not client.events.has_listeners("names")


@pytest.mark.asyncio
async def test_names_cancellation_removes_listener(client):
    request = asyncio.ensure_future(client.names("#python"))
    await asyncio.sleep(0)
    assert client.events.has_listeners("names")
    request.cancel()
    with pytest.raises(asyncio.CancelledError):
        await request
    await asyncio.sleep(0)
    assert not client.events.has_listeners("names")


@pytest.mark.asyncio
async def test_names_write_failure_propagates(client, fake_writer):
    fake_writer.drain_error = BrokenPipeError("pipe")
    with pytest.raises(NetworkError):
        await client.names("#python")
    await asyncio.sleep(0)
    assert not client.events.has_listeners("names")


@pytest.mark.asyncio
async def test_wait_for_event_with_predicate(client):
    waiter = client.wait_for_event("message", lambda sender, _t, _m: sender == "bob")
    client.dispatcher.process_incoming_data(
        ":alice!a@h PRIVMSG #c :first\r\n:bob!b@h PRIVMSG #c :second\r\n"
    )
    assert await waiter == ("bob", "#c", "second")
