# app/services/redis_store.py

from contextlib import asynccontextmanager
from typing import Iterable, Optional, Tuple

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from app.core.config import Settings
from app.core.errors import BackendUnavailableError, PartialClaimError, StoreError
from app.models.campaign import CampaignConfig
from app.services.store import StoreKeys

# KEYS[1] available set, KEYS[2] claims hash, ARGV[1] identity.
# Returns {code, reused} or nil when the pool is empty.
CLAIM_SCRIPT = """
local existing = redis.call("HGET", KEYS[2], ARGV[1])
if existing then
    return {existing, 1}
end
local code = redis.call("SPOP", KEYS[1])
if not code then
    return nil
end
redis.call("HSET", KEYS[2], ARGV[1], code)
return {code, 0}
"""


def create_redis_client(settings: Settings) -> redis.Redis:
    # No client-side retries: a timed-out claim must not be replayed
    return redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_timeout,
        retry_on_timeout=False,
    )


class RedisCodeStore:
    """Durable store adapter over a Redis set (pool) and hash (claims)."""

    mode = "redis"

    def __init__(self, client: redis.Redis, keys: StoreKeys):
        self._client = client
        self.keys = keys
        self._claim_script = client.register_script(CLAIM_SCRIPT)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisCodeStore":
        return cls(create_redis_client(settings), StoreKeys.with_prefix(settings.key_prefix))

    @asynccontextmanager
    async def _translate(self, op: str):
        try:
            yield
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise BackendUnavailableError(f"redis {op} failed: {exc}") from exc
        except RedisError as exc:
            raise StoreError(f"redis {op} failed: {exc}") from exc

    async def ping(self) -> None:
        async with self._translate("ping"):
            await self._client.ping()

    async def get_config(self) -> Optional[CampaignConfig]:
        async with self._translate("get config"):
            raw = await self._client.get(self.keys.config)
        if not raw:
            return None
        return CampaignConfig.model_validate_json(raw)

    async def set_config(self, config: CampaignConfig) -> None:
        async with self._translate("set config"):
            await self._client.set(self.keys.config, config.to_json())

    async def add_codes(self, codes: Iterable[str]) -> int:
        candidates = list(dict.fromkeys(codes))
        if not candidates:
            return 0

        async def _add(pipe) -> None:
            # Runs under WATCH on both keys; redis-py retries on WatchError
            issued = set(await pipe.hvals(self.keys.claims))
            fresh = [code for code in candidates if code not in issued]
            pipe.multi()
            if fresh:
                pipe.sadd(self.keys.available, *fresh)

        async with self._translate("add codes"):
            results = await self._client.transaction(_add, self.keys.available, self.keys.claims)
        return int(results[0]) if results else 0

    async def get_claim(self, identity: str) -> Optional[str]:
        async with self._translate("get claim"):
            return await self._client.hget(self.keys.claims, identity)

    async def claim_code(self, identity: str) -> Optional[Tuple[str, bool]]:
        try:
            async with self._translate("claim"):
                result = await self._claim_script(
                    keys=[self.keys.available, self.keys.claims], args=[identity]
                )
        except BackendUnavailableError:
            raise
        except StoreError as exc:
            # Lua writes are not rolled back, the SPOP may already have applied
            raise PartialClaimError(identity, None, exc) from exc
        if result is None:
            return None
        code, reused = result
        return code, bool(int(reused))

    async def count_available(self) -> int:
        async with self._translate("count available"):
            return int(await self._client.scard(self.keys.available))

    async def count_claimed(self) -> int:
        async with self._translate("count claimed"):
            return int(await self._client.hlen(self.keys.claims))

    async def reset(self) -> None:
        async with self._translate("reset"):
            await self._client.delete(self.keys.config, self.keys.available, self.keys.claims)

    async def close(self) -> None:
        await self._client.aclose()
