"""
Base repository with generic CRUD operations and storage error translation.
"""
import functools
import logging
from typing import TypeVar, Generic, Type, Optional, List, Any

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import exc as sa_exc
from sqlalchemy import func

from crowdfund.core.exceptions import StorageError
from crowdfund.core.pagination import create_paginated_response, page_offset

ModelType = TypeVar("ModelType", bound=SQLModel)

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (sa_exc.TimeoutError, sa_exc.OperationalError, sa_exc.InterfaceError)


def to_storage_error(error: sa_exc.SQLAlchemyError) -> StorageError:
    """Map a SQLAlchemy failure onto StorageError, flagging transient ones."""
    retryable = isinstance(error, RETRYABLE_ERRORS) or (
        isinstance(error, sa_exc.DBAPIError) and error.connection_invalidated
    )
    if isinstance(error, sa_exc.TimeoutError):
        message = "Timed out waiting for a database connection"
    elif retryable:
        message = "Database temporarily unavailable"
    else:
        message = "Database operation failed"
    return StorageError(message, retryable=retryable)


def storage_call(func):
    """Raise StorageError instead of SQLAlchemy errors from a repository coroutine."""
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except sa_exc.SQLAlchemyError as e:
            logger.error(f"{func.__qualname__} failed: {e}")
            raise to_storage_error(e) from e
    return wrapper


class BaseRepository(Generic[ModelType]):
    """
    Generic repository with CRUD operations.
    Inherit and specify the model class.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    @storage_call
    async def create(self, obj_in: dict) -> ModelType:
        """Create a new record."""
        db_obj = self.model(**obj_in)
        self.session.add(db_obj)
        await self.session.commit()
        await self.session.refresh(db_obj)
        return db_obj

    @storage_call
    async def get(self, id: Any) -> Optional[ModelType]:
        """Get a record by primary key, bypassing the identity map."""
        return await self.session.get(self.model, id, populate_existing=True)

    @storage_call
    async def list_paginated(
        self,
        filters: Optional[dict] = None,
        page: int = 1,
        limit: int = 20,
        order_by: str = "created_at",
        order_desc: bool = True
    ) -> dict:
        """List records with pagination."""
        query = select(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field) and value is not None:
                    query = query.where(getattr(self.model, field) == value)

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.session.exec(count_query)
        total = total_result.one()

        if hasattr(self.model, order_by):
            order_column = getattr(self.model, order_by)
            query = query.order_by(order_column.desc() if order_desc else order_column)

        query = query.offset(page_offset(page, limit)).limit(limit)

        result = await self.session.exec(query)
        items = result.all()

        return create_paginated_response(items, total, page, limit)
