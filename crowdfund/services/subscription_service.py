"""
Subscription service - opt in/out of new campaign announcements.
"""
import logging
from typing import List

from crowdfund.core.exceptions import NotFoundError
from crowdfund.models.notification import Subscription
from crowdfund.repositories.interfaces import SubscriptionStore

logger = logging.getLogger(__name__)


class SubscriptionService:

    def __init__(self, subscription_store: SubscriptionStore):
        self.subscription_store = subscription_store

    async def subscribe(self, user_email: str) -> Subscription:
        subscription = await self.subscription_store.subscribe(user_email)
        logger.info(f"{user_email} subscribed to new campaign announcements")
        return subscription

    async def unsubscribe(self, user_email: str) -> None:
        if not await self.subscription_store.unsubscribe(user_email):
            raise NotFoundError("Subscription")
        logger.info(f"{user_email} unsubscribed from new campaign announcements")

    async def get(self, user_email: str) -> Subscription:
        subscription = await self.subscription_store.get(user_email)
        if not subscription:
            raise NotFoundError("Subscription")
        return subscription

    async def list_subscribers(self) -> List[Subscription]:
        return await self.subscription_store.list_subscribers()
