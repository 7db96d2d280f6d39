"""
Donation schemas.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class DonationCreate(BaseModel):
    """Make a donation. Amount is in the minor currency unit."""
    campaign_id: int
    amount: int
    message: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {"campaign_id": 1, "amount": 100000, "message": "Good luck!"}
        }


class DonationResponse(BaseModel):
    """Donation response."""
    id: int
    donor_id: int
    campaign_id: int
    amount: int
    message: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
