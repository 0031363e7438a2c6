# app/models/campaign.py

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CampaignConfig(BaseModel):
    """Display metadata shown on the portal; independent of code state."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    description: str = ""
    instructions: str = ""
    # Data URL of the uploaded QR image, already compressed by the client
    qr_code: Optional[str] = None
    last_updated: Optional[datetime] = None

    def stamped(self) -> "CampaignConfig":
        if self.last_updated is not None:
            return self
        return self.model_copy(update={"last_updated": datetime.now(timezone.utc)})

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
