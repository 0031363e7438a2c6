# app/routers/portal.py

from typing import Optional

from fastapi import APIRouter, Depends

from app.core.errors import ExhaustionError, ValidationError
from app.models.campaign import CampaignConfig
from app.models.claim import RejectReason
from app.models.schemas import ClaimRequest, ClaimResponse
from app.routers.deps import get_allocator, get_campaign
from app.services.campaign_service import CampaignService
from app.services.claim_allocator import ClaimAllocator

router = APIRouter(prefix="/api", tags=["portal"])


@router.get("/config", response_model=Optional[CampaignConfig], response_model_by_alias=True)
async def read_config(campaign: CampaignService = Depends(get_campaign)):
    return await campaign.get_config()


@router.post("/claim", response_model=ClaimResponse, response_model_by_alias=True)
async def claim_code(body: ClaimRequest, allocator: ClaimAllocator = Depends(get_allocator)):
    result = await allocator.claim(body.user_id or "")
    if result.kind == "issued":
        return ClaimResponse(code=result.code, reused=result.reused)
    if result.reason is RejectReason.EXHAUSTED:
        raise ExhaustionError(result.message)
    raise ValidationError(result.message)
