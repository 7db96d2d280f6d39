"""
New campaign announcement subscription repository.
"""
from typing import List
from datetime import datetime

from sqlmodel import select
from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlmodel.ext.asyncio.session import AsyncSession

from crowdfund.models.notification import Subscription
from crowdfund.repositories.base import BaseRepository, storage_call
from crowdfund.repositories.interfaces import SubscriptionStore


class SubscriptionRepository(BaseRepository[Subscription], SubscriptionStore):
    """PostgreSQL subscription store."""

    def __init__(self, session: AsyncSession):
        super().__init__(Subscription, session)

    @storage_call
    async def subscribe(self, user_email: str) -> Subscription:
        """Subscribe, keeping the original subscribed_at if already subscribed."""
        stmt = pg_insert(Subscription).values(
            user_email=user_email,
            subscribed_at=datetime.utcnow()
        ).on_conflict_do_nothing(index_elements=["user_email"])
        await self.session.exec(stmt)
        await self.session.commit()
        return await self.session.get(Subscription, user_email, populate_existing=True)

    @storage_call
    async def unsubscribe(self, user_email: str) -> bool:
        result = await self.session.exec(
            delete(Subscription).where(Subscription.user_email == user_email)
        )
        await self.session.commit()
        return result.rowcount > 0

    @storage_call
    async def list_subscribers(self) -> List[Subscription]:
        query = select(Subscription).order_by(Subscription.subscribed_at)
        result = await self.session.exec(query)
        return result.all()
