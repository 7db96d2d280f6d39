"""
Notification and subscription schemas.
"""
from typing import Optional, Union
from datetime import datetime
from pydantic import BaseModel

from crowdfund.models.notification import NotificationTargetType


class NotificationCreate(BaseModel):
    """
    Push a notification.

    `detail` depends on the target type:
        SpecificUser -> the user's email
        Fundraisers, Donors -> the campaign id
        AllUsers, NewCampaign -> not used
    Checked by NotificationService before anything is written.
    """
    title: str
    content: str
    target_type: NotificationTargetType = NotificationTargetType.ALL_USERS
    detail: Optional[Union[int, str]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Scheduled maintenance",
                "content": "The platform will be read-only on Sunday 02:00-03:00 UTC",
                "target_type": "AllUsers"
            }
        }


class NotificationResponse(BaseModel):
    """Notification response."""
    id: int
    title: str
    content: str
    target_type: NotificationTargetType
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationMemberResponse(BaseModel):
    user_email: str
    notification_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class SubscriptionResponse(BaseModel):
    user_email: str
    subscribed_at: datetime

    class Config:
        from_attributes = True
