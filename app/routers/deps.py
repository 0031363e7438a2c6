# app/routers/deps.py

from fastapi import Request

from app.core.config import Settings
from app.services.bulk_loader import BulkLoader
from app.services.campaign_service import CampaignService
from app.services.claim_allocator import ClaimAllocator
from app.services.store_selector import StoreSelector


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_selector(request: Request) -> StoreSelector:
    return request.app.state.selector


def get_allocator(request: Request) -> ClaimAllocator:
    return request.app.state.allocator


def get_bulk_loader(request: Request) -> BulkLoader:
    return request.app.state.bulk_loader


def get_campaign(request: Request) -> CampaignService:
    return request.app.state.campaign
