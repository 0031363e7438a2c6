# app/models/claim.py

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union


class RejectReason(str, Enum):
    EXHAUSTED = "exhausted"
    INVALID_IDENTITY = "invalid_identity"


@dataclass(frozen=True)
class ClaimIssued:
    code: str
    # True when the identity already held this code before the call
    reused: bool = False
    kind: Literal["issued"] = "issued"


@dataclass(frozen=True)
class ClaimRejected:
    reason: RejectReason
    message: str
    kind: Literal["rejected"] = "rejected"


ClaimResult = Union[ClaimIssued, ClaimRejected]
