"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from typing import Any, Generic, TypeVar, Type, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import inspect, select, update, delete
from sqlalchemy.dialects import postgresql, sqlite

from staff_attendance.core.exceptions import StorageError
from staff_attendance.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session
        self.pk = inspect(model).primary_key[0]

    def upsert_insert(self):
        """
        Return a dialect-specific INSERT construct that supports ON CONFLICT.

        Raises:
            StorageError: If the configured database has no atomic upsert
        """
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise StorageError(f"Upsert is not supported on the '{dialect}' database")
        return insert(self.model)

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get(self, id: Any) -> Optional[ModelType]:
        """
        Get a record by primary key.

        Args:
            id: Primary key value

        Returns:
            Model instance or None
        """
        result = await self.session.execute(
            select(self.model).where(self.pk == id)
        )
        return result.scalar_one_or_none()

    async def exists(self, id: Any) -> bool:
        result = await self.session.execute(
            select(self.pk).where(self.pk == id)
        )
        return result.first() is not None

    async def update(self, id: Any, **kwargs) -> Optional[ModelType]:
        """
        Update a record.

        Args:
            id: Primary key value
            **kwargs: Attributes to update

        Returns:
            Updated model instance or None
        """
        await self.session.execute(
            update(self.model)
            .where(self.pk == id)
            .values(**kwargs)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        instance = await self.get(id)
        if instance is not None:
            await self.session.refresh(instance)
        return instance

    async def delete(self, id: Any) -> bool:
        """
        Delete a record.

        Args:
            id: Primary key value

        Returns:
            True if deleted, False if not found
        """
        result = await self.session.execute(
            delete(self.model).where(self.pk == id)
        )
        await self.session.flush()
        return result.rowcount > 0
