# app/core/reset_store.py

import asyncio
import sys

from app.core.config import Settings
from app.core.logging_config import configure_logging
from app.services.store_selector import build_selector
from app.services.campaign_service import CampaignService


async def reset_store():
    settings = Settings.from_env()
    selector = build_selector(settings)
    await selector.start()
    try:
        mode = await CampaignService(selector).reset()
    finally:
        await selector.close()
    print(f"Config, available codes and claims deleted ({mode})")


if __name__ == "__main__":
    if "--yes" not in sys.argv[1:]:
        sys.exit("This deletes every code and claim. Re-run with --yes to confirm.")
    configure_logging("INFO")
    asyncio.run(reset_store())
