# app/services/claim_allocator.py

import logging

from app.core.errors import BackendUnavailableError, PartialClaimError
from app.models.claim import ClaimIssued, ClaimRejected, ClaimResult, RejectReason
from app.services.store_selector import StoreSelector

logger = logging.getLogger(__name__)

EXHAUSTED_MESSAGE = "All membership codes have been claimed."
MISSING_IDENTITY_MESSAGE = "Please enter your phone number, email or member id."


class ClaimAllocator:
    """Hands out at most one code per identity.

    A claim runs against a single backend from start to finish:

    1. return the existing binding if the identity already has one;
    2. otherwise ask the store to claim: look up, pop an arbitrary code and
       bind it, all in one atomic step (a Lua script on Redis, one lock hold
       in memory).

    Concurrent claims for one identity therefore converge on the same code,
    and the pool never goes below zero. If the store fails after the pop, the
    code is gone from the pool for good and the caller gets
    ``PartialClaimError``. Losing a code is preferred over ever issuing one
    twice.
    """

    def __init__(self, selector: StoreSelector):
        self._selector = selector

    async def claim(self, identity: str) -> ClaimResult:
        identity = (identity or "").strip()
        if not identity:
            return ClaimRejected(RejectReason.INVALID_IDENTITY, MISSING_IDENTITY_MESSAGE)

        store = self._selector.current()
        try:
            existing = await store.get_claim(identity)
        except BackendUnavailableError as exc:
            if store is self._selector.fallback:
                raise
            # Nothing has been consumed yet, so the whole claim can move over
            store = await self._selector.degrade(exc)
            existing = await store.get_claim(identity)
        if existing is not None:
            return ClaimIssued(existing, reused=True)

        try:
            outcome = await store.claim_code(identity)
        except BackendUnavailableError as exc:
            # The claim may have gone through; leave the retry to the caller
            await self._selector.degrade(exc)
            raise
        except PartialClaimError as exc:
            logger.error("Code %s popped for %r but binding failed; code is lost: %s", exc.code, identity, exc.cause)
            raise

        if outcome is None:
            logger.info("Pool exhausted, no code for %r (%s)", identity, store.mode)
            return ClaimRejected(RejectReason.EXHAUSTED, EXHAUSTED_MESSAGE)
        code, reused = outcome
        if not reused:
            logger.info("Issued code to %r (%s)", identity, store.mode)
        return ClaimIssued(code, reused=reused)
