# app/services/store.py

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Tuple

from app.models.campaign import CampaignConfig


@dataclass(frozen=True)
class StoreKeys:
    """The three entries a backend keeps apart: config, pool, claims."""

    config: str
    available: str
    claims: str

    @classmethod
    def with_prefix(cls, prefix: str) -> "StoreKeys":
        return cls(
            config=f"{prefix}:config",
            available=f"{prefix}:codes:available",
            claims=f"{prefix}:claims",
        )


class CodeStore(Protocol):
    """Primitive operations shared by the durable and the fallback backend.

    Only ``claim_code`` may move a code out of the pool. It looks up, pops and
    binds in one atomic step.
    """

    mode: str

    async def ping(self) -> None: ...

    async def get_config(self) -> Optional[CampaignConfig]: ...

    async def set_config(self, config: CampaignConfig) -> None: ...

    async def add_codes(self, codes: Iterable[str]) -> int:
        """Union ``codes`` into the pool, skipping issued ones; return net-new count."""
        ...

    async def get_claim(self, identity: str) -> Optional[str]: ...

    async def claim_code(self, identity: str) -> Optional[Tuple[str, bool]]:
        """Return ``(code, reused)`` for ``identity``, binding a pooled code if it
        has none yet, or None when the pool is empty.
        """
        ...

    async def count_available(self) -> int: ...

    async def count_claimed(self) -> int: ...

    async def reset(self) -> None: ...

    async def close(self) -> None: ...
