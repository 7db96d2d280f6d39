"""
New campaign announcement subscription routes.
"""
from typing import List
from fastapi import APIRouter, Depends

from crowdfund.config import settings
from crowdfund.models.user import User
from crowdfund.schemas.notification import SubscriptionResponse
from crowdfund.services.subscription_service import SubscriptionService
from crowdfund.api.deps import get_current_admin, get_current_user, get_subscription_service

router = APIRouter(prefix=f"{settings.API_PREFIX}/subscriptions", tags=["subscriptions"])


@router.post("/me", response_model=SubscriptionResponse, status_code=201)
async def subscribe(
    current_user: User = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service)
):
    """Subscribe to new campaign announcements."""
    return await subscription_service.subscribe(current_user.email)


@router.get("/me", response_model=SubscriptionResponse)
async def get_my_subscription(
    current_user: User = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service)
):
    return await subscription_service.get(current_user.email)


@router.delete("/me", status_code=204)
async def unsubscribe(
    current_user: User = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service)
):
    """Stop receiving new campaign announcements."""
    await subscription_service.unsubscribe(current_user.email)


@router.get("/", response_model=List[SubscriptionResponse])
async def list_subscribers(
    admin: User = Depends(get_current_admin),
    subscription_service: SubscriptionService = Depends(get_subscription_service)
):
    return await subscription_service.list_subscribers()
