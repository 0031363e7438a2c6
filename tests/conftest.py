# tests/conftest.py

import asyncio

import fakeredis
import fakeredis.aioredis
import pytest

from app.core.retry import RetryPolicy
from app.services.memory_store import MemoryCodeStore
from app.services.redis_store import RedisCodeStore
from app.services.store import StoreKeys
from app.services.store_selector import StoreSelector


class RecordingSleeper:
    """Async sleeper that records requested delays instead of waiting."""

    def __init__(self):
        self.calls = []
        self.on_sleep = None

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.calls))
        await asyncio.sleep(0)


@pytest.fixture
def sleeper():
    return RecordingSleeper()


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def redis_store(fake_server):
    client = fakeredis.aioredis.FakeRedis(server=fake_server, decode_responses=True)
    return RedisCodeStore(client, StoreKeys.with_prefix("test_portal"))


@pytest.fixture
def memory_store():
    return MemoryCodeStore()


@pytest.fixture
async def selector(redis_store, memory_store, sleeper):
    selector = StoreSelector(
        redis_store,
        memory_store,
        policy=RetryPolicy(max_attempts=3, base_delay=2.0),
        sleeper=sleeper,
    )
    await selector.start()
    yield selector
    await selector.close()


@pytest.fixture
async def memory_selector():
    selector = StoreSelector(None, MemoryCodeStore())
    await selector.start()
    return selector


@pytest.fixture(params=["redis", "memory"])
async def any_selector(request, selector, memory_selector):
    """Run a test once against the durable backend and once memory-only."""
    return selector if request.param == "redis" else memory_selector
