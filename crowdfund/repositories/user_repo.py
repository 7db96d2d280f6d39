"""
User repository.
"""
from sqlmodel.ext.asyncio.session import AsyncSession

from crowdfund.models.user import User
from crowdfund.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User lookups."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)
