"""
Donation model - immutable except for the donor's message.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Donation(SQLModel, table=True):
    __tablename__ = "donations"

    id: Optional[int] = Field(default=None, primary_key=True)
    donor_id: int = Field(foreign_key="users.id", index=True)
    campaign_id: int = Field(foreign_key="campaigns.id", index=True)
    amount: int
    message: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
