# app/core/retry.py

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator

Sleeper = Callable[[float], Awaitable[None]]


async def default_sleeper(seconds: float) -> None:
    await asyncio.sleep(seconds)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded reconnect schedule.

    ``factor == 1`` gives fixed spacing, anything larger grows exponentially up
    to ``max_delay``.
    """

    max_attempts: int = 3
    base_delay: float = 2.0
    factor: float = 1.0
    max_delay: float = 30.0

    def delay_for(self, attempt: int) -> float:
        """Return the wait before ``attempt`` (1-indexed)."""
        attempt = max(1, attempt)
        return min(self.base_delay * (self.factor ** (attempt - 1)), self.max_delay)

    def delays(self) -> Iterator[float]:
        for attempt in range(1, self.max_attempts + 1):
            yield self.delay_for(attempt)

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_attempts,
            base_delay=settings.retry_delay,
            factor=settings.retry_backoff,
        )
