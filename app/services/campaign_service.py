# app/services/campaign_service.py

import logging
from dataclasses import dataclass
from typing import Optional

from app.models.campaign import CampaignConfig
from app.services.store_selector import StoreSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolStats:
    available: int
    claimed: int
    mode: str
    state: str

    @property
    def total(self) -> int:
        return self.available + self.claimed

    @property
    def cloud(self) -> bool:
        return self.mode == "redis"


class CampaignService:
    """Configuration, statistics and reset; none of these go through the allocator."""

    def __init__(self, selector: StoreSelector):
        self._selector = selector

    async def get_config(self) -> Optional[CampaignConfig]:
        config, _ = await self._selector.execute(lambda store: store.get_config())
        return config

    async def save_config(self, config: CampaignConfig) -> str:
        config = config.stamped()
        _, mode = await self._selector.execute(lambda store: store.set_config(config))
        return mode

    async def stats(self) -> PoolStats:
        async def _counts(store):
            return await store.count_available(), await store.count_claimed()

        (available, claimed), mode = await self._selector.execute(_counts)
        return PoolStats(available=available, claimed=claimed, mode=mode, state=self._selector.state.value)

    async def reset(self) -> str:
        _, mode = await self._selector.execute(lambda store: store.reset())
        logger.warning("Campaign reset: config, pool and claims cleared (%s)", mode)
        return mode
