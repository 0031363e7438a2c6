# app/core/count_codes.py

import asyncio

from app.core.config import Settings
from app.core.logging_config import configure_logging
from app.services.store_selector import build_selector
from app.services.campaign_service import CampaignService


async def count_codes():
    settings = Settings.from_env()
    selector = build_selector(settings)
    await selector.start()
    try:
        stats = await CampaignService(selector).stats()
    finally:
        await selector.close()
    print(f"Available: {stats.available}, Claimed: {stats.claimed}, Total: {stats.total}, Mode: {stats.mode}")


if __name__ == "__main__":
    configure_logging("WARNING")
    asyncio.run(count_codes())
