"""
API dependencies - shared across all routes.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from crowdfund.database import get_session
from crowdfund.core.security import get_caller_id
from crowdfund.core.exceptions import ForbiddenError, UnauthorizedError
from crowdfund.models.user import User
from crowdfund.repositories.campaign_repo import CampaignRepository
from crowdfund.repositories.donation_repo import DonationRepository
from crowdfund.repositories.notification_repo import NotificationRepository
from crowdfund.repositories.subscription_repo import SubscriptionRepository
from crowdfund.repositories.user_repo import UserRepository
from crowdfund.repositories.wallet_repo import WalletRepository
from crowdfund.services.campaign_service import CampaignService
from crowdfund.services.donation_service import DonationService
from crowdfund.services.notification_dispatcher import NotificationDispatcher
from crowdfund.services.notification_service import NotificationService
from crowdfund.services.subscription_service import SubscriptionService
from crowdfund.services.wallet_service import WalletService


bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session)
) -> User:
    """Resolve the verified caller id from the bearer token to a user."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    user_id = get_caller_id(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Could not validate credentials")

    user = await UserRepository(session).get(user_id)
    if not user:
        raise UnauthorizedError("User not found")

    return user


async def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Get current user, must be a platform admin."""
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher


def get_campaign_service(
    session: AsyncSession = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher)
) -> CampaignService:
    return CampaignService(CampaignRepository(session), dispatcher)


def get_donation_service(
    session: AsyncSession = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher)
) -> DonationService:
    return DonationService(
        DonationRepository(session),
        CampaignRepository(session),
        dispatcher
    )


def get_notification_service(
    session: AsyncSession = Depends(get_session)
) -> NotificationService:
    return NotificationService(NotificationRepository(session))


def get_subscription_service(
    session: AsyncSession = Depends(get_session)
) -> SubscriptionService:
    return SubscriptionService(SubscriptionRepository(session))


def get_wallet_service(
    session: AsyncSession = Depends(get_session)
) -> WalletService:
    return WalletService(WalletRepository(session), CampaignRepository(session))
