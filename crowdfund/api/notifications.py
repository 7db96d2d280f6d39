"""
Notifications API routes.
"""
from typing import List
from fastapi import APIRouter, Depends

from crowdfund.config import settings
from crowdfund.models.user import User
from crowdfund.schemas.common import MessageResponse
from crowdfund.schemas.notification import (
    NotificationCreate, NotificationMemberResponse, NotificationResponse
)
from crowdfund.services.notification_service import NotificationService
from crowdfund.api.deps import get_current_admin, get_current_user, get_notification_service

router = APIRouter(prefix=f"{settings.API_PREFIX}/notifications", tags=["notifications"])


@router.post("/", response_model=NotificationResponse)
async def create_notification(
    notification_data: NotificationCreate,
    admin: User = Depends(get_current_admin),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Create a notification and push it to its audience."""
    return await notification_service.create_and_push(notification_data)


@router.get("/", response_model=List[NotificationResponse])
async def list_notifications(
    admin: User = Depends(get_current_admin),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """List every notification."""
    return await notification_service.list_all()


@router.get("/me", response_model=List[NotificationResponse])
async def list_my_notifications(
    current_user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Notifications for everyone plus those addressed to the caller."""
    return await notification_service.list_for_user(current_user.email)


@router.delete("/{notification_id}/me", status_code=204)
async def dismiss_notification(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Remove a notification from the caller's list only."""
    await notification_service.dismiss(notification_id, current_user.email)


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: int,
    admin: User = Depends(get_current_admin),
    notification_service: NotificationService = Depends(get_notification_service)
):
    return await notification_service.get(notification_id)


@router.get("/{notification_id}/members", response_model=List[NotificationMemberResponse])
async def list_notification_members(
    notification_id: int,
    admin: User = Depends(get_current_admin),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Audience snapshot of a notification."""
    return await notification_service.list_members(notification_id)


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: int,
    admin: User = Depends(get_current_admin),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Delete a notification for everyone."""
    await notification_service.delete(notification_id)
    return {"message": "Notification deleted"}
