import pytest

from ircb.errors.internal import NetworkError
from ircb.utils.retry import RetryExhaustedError, connect_with_retry


class FakeClient:
    def __init__(self, number: int) -> None:
        self.number = number


def _factory():
    created: list[FakeClient] = []

    def factory() -> FakeClient:
        client = FakeClient(len(created) + 1)
        created.append(client)
        return client

    return factory, created


@pytest.mark.asyncio
async def test_first_attempt_success_returns_client():
    factory, created = _factory()

    async def connect(client: FakeClient) -> bool:
        return True

    client = await connect_with_retry(factory, connect, max_attempts=3, multiplier=0)
    assert client is created[0]
    assert len(created) == 1


@pytest.mark.asyncio
async def test_failed_attempts_get_a_fresh_client():
    factory, created = _factory()

    async def connect(client: FakeClient) -> bool:
        if client.number == 1:
            return False
        if client.number == 2:
            raise ConnectionRefusedError("refused")
        return True

    client = await connect_with_retry(factory, connect, max_attempts=5, multiplier=0)
    assert client.number == 3
    assert len(created) == 3


@pytest.mark.asyncio
async def test_exhaustion_raises_with_attempt_count():
    factory, created = _factory()

    async def connect(client: FakeClient) -> bool:
        raise NetworkError("down")

    with pytest.raises(RetryExhaustedError) as exc_info:
        await connect_with_retry(factory, connect, max_attempts=2, multiplier=0)
    assert exc_info.value.attempts == 2
    assert exc_info.value.data == {"attempts": 2}
    assert len(created) == 2
    assert isinstance(exc_info.value, NetworkError)


@pytest.mark.asyncio
async def test_unexpected_errors_are_not_retried():
    factory, created = _factory()

    async def connect(client: FakeClient) -> bool:
        raise ValueError("bug")

    with pytest.raises(ValueError):
        await connect_with_retry(factory, connect, max_attempts=3, multiplier=0)
    assert len(created) == 1


@pytest.mark.asyncio
async def test_timeouts_are_retried():
    factory, created = _factory()

    async def connect(client: FakeClient) -> bool:
        if client.number == 1:
            raise TimeoutError()
        return True

    client = await connect_with_retry(factory, connect, max_attempts=2, multiplier=0)
    assert client.number == 2
