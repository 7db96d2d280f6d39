"""
Notification models.
Audience membership is a snapshot taken when the notification is pushed.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


class NotificationTargetType(str, Enum):
    ALL_USERS = "AllUsers"
    SPECIFIC_USER = "SpecificUser"
    FUNDRAISERS = "Fundraisers"
    DONORS = "Donors"
    NEW_CAMPAIGN = "NewCampaign"


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    content: str
    target_type: NotificationTargetType = Field(default=NotificationTargetType.ALL_USERS, index=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)


class NotificationMembership(SQLModel, table=True):
    """One row per (user, notification) in the audience."""
    __tablename__ = "notification_membership"

    user_email: str = Field(primary_key=True)
    notification_id: int = Field(
        primary_key=True,
        foreign_key="notifications.id",
        ondelete="CASCADE",
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)


class Subscription(SQLModel, table=True):
    """Opt-in to new campaign announcements."""
    __tablename__ = "subscriptions"

    user_email: str = Field(primary_key=True)
    subscribed_at: datetime = Field(default_factory=datetime.utcnow)
