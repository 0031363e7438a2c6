# app/services/memory_store.py

import asyncio
from typing import Dict, Iterable, Optional, Set, Tuple

from app.core.errors import PartialClaimError, StoreError
from app.models.campaign import CampaignConfig


class MemoryCodeStore:
    """Process-local fallback store. Contents are lost on restart."""

    mode = "memory"

    def __init__(self) -> None:
        self._config: Optional[CampaignConfig] = None
        self._available: Set[str] = set()
        self._claims: Dict[str, str] = {}
        self._issued: Set[str] = set()
        self._guard = asyncio.Lock()

    async def ping(self) -> None:
        return None

    async def get_config(self) -> Optional[CampaignConfig]:
        return self._config

    async def set_config(self, config: CampaignConfig) -> None:
        self._config = config

    async def add_codes(self, codes: Iterable[str]) -> int:
        async with self._guard:
            before = len(self._available)
            self._available.update(code for code in codes if code not in self._issued)
            return len(self._available) - before

    async def get_claim(self, identity: str) -> Optional[str]:
        return self._claims.get(identity)

    async def claim_code(self, identity: str) -> Optional[Tuple[str, bool]]:
        async with self._guard:
            existing = self._claims.get(identity)
            if existing is not None:
                return existing, True
            if not self._available:
                return None
            code = self._available.pop()
            try:
                self._bind(identity, code)
            except StoreError as exc:
                raise PartialClaimError(identity, code, exc) from exc
            return code, False

    def _bind(self, identity: str, code: str) -> None:
        self._claims[identity] = code
        self._issued.add(code)

    async def count_available(self) -> int:
        return len(self._available)

    async def count_claimed(self) -> int:
        return len(self._claims)

    async def reset(self) -> None:
        async with self._guard:
            self._config = None
            self._available.clear()
            self._claims.clear()
            self._issued.clear()

    async def close(self) -> None:
        return None
