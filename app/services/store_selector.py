# app/services/store_selector.py

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple, TypeVar

from app.core.config import Settings
from app.core.errors import BackendUnavailableError, StoreError
from app.core.retry import RetryPolicy, Sleeper, default_sleeper
from app.services.memory_store import MemoryCodeStore
from app.services.redis_store import RedisCodeStore
from app.services.store import CodeStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MonitorState(str, Enum):
    # No durable store configured
    UNKNOWN = "unknown"
    CONNECTING = "connecting"
    READY = "ready"
    DEGRADED = "degraded"


class StoreSelector:
    """Tracks durable-store health and routes every operation to a backend.

    The durable store serves requests only while the monitor is ``READY``;
    otherwise the fallback store does. The choice is made per call, so a
    recovery is picked up by the next request. Data written to the fallback
    while degraded is never copied back into the durable store.
    """

    def __init__(
        self,
        durable: Optional[CodeStore],
        fallback: CodeStore,
        policy: RetryPolicy = RetryPolicy(),
        sleeper: Sleeper = default_sleeper,
    ):
        self.durable = durable
        self.fallback = fallback
        self.policy = policy
        self._sleeper = sleeper
        self._retry_task: Optional[asyncio.Task] = None
        self.state = MonitorState.CONNECTING if durable is not None else MonitorState.UNKNOWN

    @property
    def mode(self) -> str:
        return self.current().mode

    @property
    def retry_task(self) -> Optional[asyncio.Task]:
        return self._retry_task

    def current(self) -> CodeStore:
        if self.state is MonitorState.READY and self.durable is not None:
            return self.durable
        return self.fallback

    async def start(self) -> MonitorState:
        if self.durable is None:
            logger.warning("No durable store configured, serving from process memory only")
            return self.state
        if not await self._handshake():
            self._schedule_retries()
        return self.state

    async def reconnect(self) -> MonitorState:
        """Manual trigger: drop any running schedule and try again from scratch."""
        if self.durable is None:
            return self.state
        await self._cancel_retries()
        self.state = MonitorState.CONNECTING
        if not await self._handshake():
            self._schedule_retries()
        return self.state

    async def degrade(self, exc: Exception) -> CodeStore:
        """Record a durable-store failure and return the fallback store."""
        if self.state in (MonitorState.READY, MonitorState.CONNECTING):
            logger.warning("Durable store unavailable (%s), switching to memory fallback", exc)
            self.state = MonitorState.DEGRADED
            self._schedule_retries()
        return self.fallback

    async def execute(self, operation: Callable[[CodeStore], Awaitable[T]]) -> Tuple[T, str]:
        """Run ``operation`` on the active store, replaying it on the fallback
        if the durable store turns out to be unreachable.

        Returns the result together with the mode that served it.
        """
        store = self.current()
        try:
            return await operation(store), store.mode
        except BackendUnavailableError as exc:
            if store is self.fallback:
                raise
            fallback = await self.degrade(exc)
        return await operation(fallback), fallback.mode

    async def close(self) -> None:
        await self._cancel_retries()
        if self.durable is not None:
            await self.durable.close()

    async def _handshake(self) -> bool:
        try:
            await self.durable.ping()
        except StoreError as exc:
            if self.state is not MonitorState.DEGRADED:
                logger.warning("Durable store handshake failed: %s", exc)
            self.state = MonitorState.DEGRADED
            return False
        self.state = MonitorState.READY
        logger.info("Connected to durable store")
        return True

    def _schedule_retries(self) -> None:
        if self.policy.max_attempts <= 0:
            return
        if self._retry_task is not None and not self._retry_task.done():
            return
        self._retry_task = asyncio.create_task(self._retry_loop())

    async def _retry_loop(self) -> bool:
        for attempt, delay in enumerate(self.policy.delays(), start=1):
            logger.info("Reconnect attempt %d/%d in %.1fs", attempt, self.policy.max_attempts, delay)
            await self._sleeper(delay)
            if await self._handshake():
                return True
        logger.warning(
            "Max reconnect attempts (%d) reached; staying on memory fallback until a manual reconnect",
            self.policy.max_attempts,
        )
        return False

    async def _cancel_retries(self) -> None:
        task, self._retry_task = self._retry_task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


def build_selector(settings: Settings) -> StoreSelector:
    """Wire the Redis adapter (when configured) and the memory fallback."""
    durable = RedisCodeStore.from_settings(settings) if settings.durable_enabled else None
    return StoreSelector(durable, MemoryCodeStore(), policy=RetryPolicy.from_settings(settings))
