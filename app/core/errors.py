# app/core/errors.py

from typing import Optional

GENERIC_FAILURE_MESSAGE = "Service temporarily unavailable, please try again later."


class PortalError(Exception):
    """Base class for errors raised by the membership portal."""


class ValidationError(PortalError):
    """Input rejected before any store was touched."""


class ExhaustionError(PortalError):
    """The pool of available codes is empty."""

    def __init__(self, message: str = "All membership codes have been claimed."):
        super().__init__(message)


class StoreError(PortalError):
    """A store operation failed."""


class BackendUnavailableError(StoreError):
    """The durable store could not be reached or did not answer in time."""


class PartialClaimError(StoreError):
    """A code was popped from the pool but could not be bound to the identity.

    The code stays consumed: it is never put back, so it cannot be issued twice.
    """

    def __init__(self, identity: str, code: Optional[str], cause: Exception):
        # code is None when the store cannot tell which code was consumed
        super().__init__(f"code {code or '<unknown>'} popped for {identity!r} but binding failed: {cause}")
        self.identity = identity
        self.code = code
        self.cause = cause
