"""
Campaign schemas.
"""
from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, field_validator

from crowdfund.models.campaign import CampaignStatus


class CampaignCreate(BaseModel):
    """Create a new campaign (starts as Pending)."""
    name: str
    description: str = ""
    target_amount: int
    start_date: Optional[datetime] = None
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def to_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Timestamps are stored as naive UTC
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Clean water for Sumba",
                "description": "Drilling two wells in East Sumba",
                "target_amount": 50000000,
                "end_date": "2026-12-31T00:00:00"
            }
        }


class CampaignReject(BaseModel):
    """Optional rejection reason shown to the fundraiser."""
    reason: Optional[str] = None


class CampaignEvidence(BaseModel):
    """Proof of fund usage."""
    evidence_url: str


class CampaignResponse(BaseModel):
    """Campaign response."""
    id: int
    owner_id: int
    name: str
    description: str
    target_amount: int
    collected_amount: int
    status: CampaignStatus
    start_date: datetime
    end_date: datetime
    evidence_url: Optional[str]
    evidence_uploaded_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
