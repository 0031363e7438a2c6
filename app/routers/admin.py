# app/routers/admin.py

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.core.errors import ValidationError
from app.models.campaign import CampaignConfig
from app.models.schemas import (
    BulkCodesRequest,
    BulkCodesResponse,
    HealthResponse,
    ModeResponse,
    StatsResponse,
)
from app.routers.deps import get_bulk_loader, get_campaign, get_selector, get_settings
from app.services.bulk_loader import BulkLoader, normalize_codes
from app.services.campaign_service import CampaignService
from app.services.store_selector import StoreSelector

router = APIRouter(prefix="/api", tags=["admin"])


@router.api_route("/config", methods=["PUT", "POST"], response_model=ModeResponse)
async def save_config(config: CampaignConfig, campaign: CampaignService = Depends(get_campaign)):
    mode = await campaign.save_config(config)
    return ModeResponse(mode=mode)


@router.post("/codes/bulk", response_model=BulkCodesResponse)
@router.post("/codes/upload", response_model=BulkCodesResponse, include_in_schema=False)
async def upload_codes(
    body: BulkCodesRequest,
    loader: BulkLoader = Depends(get_bulk_loader),
    campaign: CampaignService = Depends(get_campaign),
    settings: Settings = Depends(get_settings),
):
    if settings.max_pool_size:
        stats = await campaign.stats()
        incoming = len(normalize_codes(body.codes))
        if stats.total + incoming > settings.max_pool_size:
            raise ValidationError(
                f"Upload would exceed the pool limit of {settings.max_pool_size} codes."
            )
    report = await loader.load(body.codes)
    return BulkCodesResponse(count=report.inserted, submitted=report.submitted, mode=report.mode)


@router.get("/stats", response_model=StatsResponse, response_model_by_alias=True)
async def read_stats(campaign: CampaignService = Depends(get_campaign)):
    stats = await campaign.stats()
    return StatsResponse(
        total=stats.total,
        claimed=stats.claimed,
        available=stats.available,
        backend_mode=stats.mode,
        cloud=stats.cloud,
        state=stats.state,
    )


@router.post("/reset", response_model=ModeResponse)
async def reset_campaign(campaign: CampaignService = Depends(get_campaign)):
    mode = await campaign.reset()
    return ModeResponse(mode=mode)


@router.get("/health", response_model=HealthResponse)
async def health(selector: StoreSelector = Depends(get_selector)):
    return HealthResponse(state=selector.state.value, mode=selector.mode)


@router.post("/backend/reconnect", response_model=HealthResponse)
async def reconnect(selector: StoreSelector = Depends(get_selector)):
    state = await selector.reconnect()
    return HealthResponse(state=state.value, mode=selector.mode)
