# app/models/schemas.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClaimRequest(_CamelModel):
    user_id: Optional[str] = None


class ClaimResponse(_CamelModel):
    code: str
    reused: bool


class BulkCodesRequest(_CamelModel):
    codes: List[str] = Field(default_factory=list)


class BulkCodesResponse(_CamelModel):
    success: bool = True
    count: int
    submitted: int
    mode: str


class ModeResponse(_CamelModel):
    success: bool = True
    mode: str


class StatsResponse(_CamelModel):
    total: int
    claimed: int
    available: int
    backend_mode: str
    cloud: bool
    state: str


class HealthResponse(_CamelModel):
    state: str
    mode: str
