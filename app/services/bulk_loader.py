# app/services/bulk_loader.py

import logging
from dataclasses import dataclass
from typing import Iterable, List

from app.core.errors import ValidationError
from app.services.store_selector import StoreSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadReport:
    submitted: int
    # Net-new codes after dedup against the pool and issued codes
    inserted: int
    mode: str


def normalize_codes(candidates: Iterable[str]) -> List[str]:
    """Trim candidates and drop blanks, keeping first-seen order."""
    if candidates is None or isinstance(candidates, (str, bytes)):
        raise ValidationError("Codes must be a list of strings.")
    cleaned = []
    for candidate in candidates:
        if not isinstance(candidate, str):
            raise ValidationError("Codes must be a list of strings.")
        candidate = candidate.strip()
        if candidate:
            cleaned.append(candidate)
    return cleaned


class BulkLoader:
    def __init__(self, selector: StoreSelector):
        self._selector = selector

    async def load(self, candidates: Iterable[str]) -> LoadReport:
        codes = normalize_codes(candidates)
        if not codes:
            raise ValidationError("No valid codes in the upload.")
        inserted, mode = await self._selector.execute(lambda store: store.add_codes(codes))
        logger.info("Loaded %d new codes out of %d submitted (%s)", inserted, len(codes), mode)
        return LoadReport(submitted=len(codes), inserted=inserted, mode=mode)
