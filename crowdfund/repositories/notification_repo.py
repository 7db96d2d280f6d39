"""
Notification and audience membership repository.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, List

from sqlmodel import select, or_
from sqlalchemy import delete, func, insert, literal
from sqlalchemy import exc as sa_exc
from sqlalchemy import select as sa_select
from sqlmodel.ext.asyncio.session import AsyncSession

from crowdfund.models.campaign import Campaign
from crowdfund.models.donation import Donation
from crowdfund.models.notification import (
    Notification, NotificationMembership, NotificationTargetType, Subscription
)
from crowdfund.models.user import User
from crowdfund.repositories.base import BaseRepository, storage_call, to_storage_error
from crowdfund.repositories.interfaces import NotificationStore

MEMBERSHIP_COLUMNS = ["user_email", "notification_id", "created_at"]


class NotificationRepository(BaseRepository[Notification], NotificationStore):
    """
    PostgreSQL notification store.
    Writes made inside `transaction()` are flushed, never committed, until the block exits.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(Notification, session)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
            await self.session.commit()
        except sa_exc.SQLAlchemyError as e:
            await self.session.rollback()
            raise to_storage_error(e) from e
        except Exception:
            await self.session.rollback()
            raise

    @storage_call
    async def insert_notification(
        self,
        title: str,
        content: str,
        target_type: NotificationTargetType
    ) -> Notification:
        notification = Notification(title=title, content=content, target_type=target_type)
        self.session.add(notification)
        await self.session.flush()
        return notification

    @storage_call
    async def add_member(self, notification_id: int, user_email: str) -> None:
        self.session.add(NotificationMembership(
            user_email=user_email,
            notification_id=notification_id
        ))
        await self.session.flush()

    async def _insert_audience(self, audience) -> int:
        stmt = insert(NotificationMembership).from_select(MEMBERSHIP_COLUMNS, audience)
        result = await self.session.exec(stmt)
        return result.rowcount

    @storage_call
    async def add_subscribers(self, notification_id: int) -> int:
        audience = sa_select(
            Subscription.user_email,
            literal(notification_id),
            func.now()
        )
        return await self._insert_audience(audience)

    @storage_call
    async def add_campaign_owner(self, notification_id: int, campaign_id: int) -> Optional[int]:
        if await self.session.get(Campaign, campaign_id) is None:
            return None
        audience = (
            sa_select(User.email, literal(notification_id), func.now())
            .join(Campaign, Campaign.owner_id == User.id)
            .where(Campaign.id == campaign_id)
        )
        return await self._insert_audience(audience)

    @storage_call
    async def add_campaign_donors(self, notification_id: int, campaign_id: int) -> Optional[int]:
        if await self.session.get(Campaign, campaign_id) is None:
            return None
        donors = (
            sa_select(User.email)
            .join(Donation, Donation.donor_id == User.id)
            .where(Donation.campaign_id == campaign_id)
            .distinct()
            .subquery()
        )
        audience = sa_select(donors.c.email, literal(notification_id), func.now())
        return await self._insert_audience(audience)

    @storage_call
    async def list_all(self) -> List[Notification]:
        query = select(Notification).order_by(Notification.created_at.desc())
        result = await self.session.exec(query)
        return result.all()

    @storage_call
    async def list_for_user(self, user_email: str) -> List[Notification]:
        member_of = select(NotificationMembership.notification_id).where(
            NotificationMembership.user_email == user_email
        )
        query = select(Notification).where(
            or_(
                Notification.target_type == NotificationTargetType.ALL_USERS,
                Notification.id.in_(member_of),
            )
        ).order_by(Notification.created_at.desc())
        result = await self.session.exec(query)
        return result.all()

    @storage_call
    async def list_members(self, notification_id: int) -> List[NotificationMembership]:
        query = select(NotificationMembership).where(
            NotificationMembership.notification_id == notification_id
        )
        result = await self.session.exec(query)
        return result.all()

    @storage_call
    async def delete(self, notification_id: int) -> bool:
        """Delete the notification together with its audience rows."""
        await self.session.exec(
            delete(NotificationMembership).where(
                NotificationMembership.notification_id == notification_id
            )
        )
        result = await self.session.exec(
            delete(Notification).where(Notification.id == notification_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    @storage_call
    async def delete_for_user(self, notification_id: int, user_email: str) -> bool:
        result = await self.session.exec(
            delete(NotificationMembership).where(
                NotificationMembership.notification_id == notification_id,
                NotificationMembership.user_email == user_email,
            )
        )
        await self.session.commit()
        return result.rowcount > 0
