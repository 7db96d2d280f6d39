"""
Campaign model - a fundraising effort with a target and a lifecycle status.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


class CampaignStatus(str, Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    REJECTED = "Rejected"
    COMPLETED = "Completed"


class Campaign(SQLModel, table=True):
    """
    Campaign entity.
    Amounts are integers in the minor currency unit. collected_amount never decreases.
    """
    __tablename__ = "campaigns"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="users.id", index=True)

    # Basic info
    name: str
    description: str = ""

    # Funding
    target_amount: int
    collected_amount: int = Field(default=0)

    status: CampaignStatus = Field(default=CampaignStatus.PENDING, index=True)

    # Schedule
    start_date: datetime = Field(default_factory=datetime.utcnow)
    end_date: datetime

    # Fund usage evidence
    evidence_url: Optional[str] = None
    evidence_uploaded_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def goal_reached(self) -> bool:
        return self.collected_amount >= self.target_amount
