"""
Notification service - fan-out of notifications to their audience.

A push writes the notification row and its audience membership rows in one
transaction. The audience is resolved per target type through AUDIENCE_RESOLVERS
and is a snapshot: later subscribers, owners or donors do not gain membership.
AllUsers notifications have no membership rows; every user sees them.
"""
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Union

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from crowdfund.core.exceptions import NotFoundError, ValidationError
from crowdfund.models.notification import (
    Notification, NotificationMembership, NotificationTargetType
)
from crowdfund.repositories.interfaces import NotificationStore
from crowdfund.schemas.notification import NotificationCreate

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)

Detail = Optional[Union[int, str]]
AudienceResolver = Callable[[NotificationStore, int, Detail], Awaitable[int]]


async def _everyone(store: NotificationStore, notification_id: int, detail: Detail) -> int:
    return 0


async def _specific_user(store: NotificationStore, notification_id: int, detail: Detail) -> int:
    await store.add_member(notification_id, detail)
    return 1


async def _subscribers(store: NotificationStore, notification_id: int, detail: Detail) -> int:
    return await store.add_subscribers(notification_id)


async def _campaign_owner(store: NotificationStore, notification_id: int, detail: Detail) -> int:
    count = await store.add_campaign_owner(notification_id, detail)
    if count is None:
        raise NotFoundError("Campaign", detail)
    return count


async def _campaign_donors(store: NotificationStore, notification_id: int, detail: Detail) -> int:
    count = await store.add_campaign_donors(notification_id, detail)
    if count is None:
        raise NotFoundError("Campaign", detail)
    return count


AUDIENCE_RESOLVERS: Dict[NotificationTargetType, AudienceResolver] = {
    NotificationTargetType.ALL_USERS: _everyone,
    NotificationTargetType.SPECIFIC_USER: _specific_user,
    NotificationTargetType.NEW_CAMPAIGN: _subscribers,
    NotificationTargetType.FUNDRAISERS: _campaign_owner,
    NotificationTargetType.DONORS: _campaign_donors,
}

CAMPAIGN_TARGETS = (NotificationTargetType.FUNDRAISERS, NotificationTargetType.DONORS)
# Upper bound of the INTEGER campaign id column
MAX_CAMPAIGN_ID = 2**31 - 1


def _parse_campaign_id(detail: Detail) -> int:
    if isinstance(detail, bool):
        raise ValidationError("Campaign id must be a positive integer")
    if isinstance(detail, str):
        detail = detail.strip()
        if not (detail.isascii() and detail.isdigit()):
            raise ValidationError("Campaign id must be a positive integer")
        detail = int(detail)
    if not 0 < detail <= MAX_CAMPAIGN_ID:
        raise ValidationError("Campaign id must be a positive integer")
    return detail


def validate_request(request: NotificationCreate) -> Detail:
    """
    Check a push request without touching storage.

    Returns:
        The normalized detail for the audience resolver.

    Raises:
        ValidationError
    """
    if not request.title or not request.title.strip():
        raise ValidationError("Title cannot be empty")
    if not request.content or not request.content.strip():
        raise ValidationError("Content cannot be empty")

    target = NotificationTargetType(request.target_type)
    detail = request.detail
    if isinstance(detail, str) and not detail.strip():
        detail = None

    if target == NotificationTargetType.SPECIFIC_USER:
        if detail is None:
            raise ValidationError("A user email is required for SpecificUser notifications")
        try:
            return _email_adapter.validate_python(str(detail).strip())
        except PydanticValidationError:
            raise ValidationError(f"'{detail}' is not a valid email address")

    if target in CAMPAIGN_TARGETS:
        if detail is None:
            raise ValidationError(f"A campaign id is required for {target.value} notifications")
        return _parse_campaign_id(detail)

    if detail is not None:
        raise ValidationError(f"{target.value} notifications do not take a detail")
    return None


class NotificationService:
    """Service for notification fan-out and user-scoped reads."""

    def __init__(self, store: NotificationStore):
        self.store = store

    async def create_and_push(self, request: NotificationCreate) -> Notification:
        """Create a notification and persist its audience, all or nothing."""
        detail = validate_request(request)
        target = NotificationTargetType(request.target_type)
        resolve = AUDIENCE_RESOLVERS[target]

        async with self.store.transaction():
            notification = await self.store.insert_notification(
                title=request.title.strip(),
                content=request.content.strip(),
                target_type=target,
            )
            members = await resolve(self.store, notification.id, detail)

        logger.info(
            f"Pushed notification {notification.id} ({target.value}) to {members} member(s)"
        )
        return notification

    async def get(self, notification_id: int) -> Notification:
        notification = await self.store.get(notification_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)
        return notification

    async def list_all(self) -> List[Notification]:
        return await self.store.list_all()

    async def list_for_user(self, user_email: str) -> List[Notification]:
        return await self.store.list_for_user(user_email)

    async def list_members(self, notification_id: int) -> List[NotificationMembership]:
        await self.get(notification_id)
        return await self.store.list_members(notification_id)

    async def delete(self, notification_id: int) -> None:
        """Delete a notification for everyone."""
        if not await self.store.delete(notification_id):
            raise NotFoundError("Notification", notification_id)
        logger.info(f"Deleted notification {notification_id}")

    async def dismiss(self, notification_id: int, user_email: str) -> None:
        """Remove one user's membership, leaving the notification for the others."""
        if not await self.store.delete_for_user(notification_id, user_email):
            raise NotFoundError("Notification", notification_id)
