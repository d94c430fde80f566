"""Base repository with generic CRUD operations."""
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import Executable, Result, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.core.exceptions import AlreadyExistsError, InternalError
from finance_dashboard.models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD operations for any model.

    Lookups return None when nothing matches; that is the not-found signal
    the services translate. Unique-constraint violations surface as
    AlreadyExistsError with the repository's conflict_code. Any other
    database failure surfaces as InternalError.
    """

    conflict_code = "DB_002"

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: Any) -> T | None:
        """Get a single record by ID."""
        result = await self._execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[T]:
        """Get multiple records with pagination."""
        result = await self._execute(
            select(self.model).order_by(self.model.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def create(self, obj: T) -> T:
        """Create a new record."""
        self.db.add(obj)
        await self._commit()
        await self.db.refresh(obj)
        return obj

    async def save(self, obj: T) -> T:
        """Persist changes made to an already loaded record."""
        await self._commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, id: Any, data: dict) -> T | None:
        """Update a record by ID with provided data."""
        obj = await self.get_by_id(id)
        if not obj:
            return None

        for key, value in data.items():
            if hasattr(obj, key):
                setattr(obj, key, value)

        return await self.save(obj)

    async def delete(self, id: Any) -> bool:
        """Delete a record by ID."""
        obj = await self.get_by_id(id)
        if not obj:
            return False

        await self.db.delete(obj)
        await self._commit()
        return True

    async def _execute(self, statement: Executable) -> Result:
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            raise InternalError(
                details={"table": self.model.__tablename__, "reason": type(e).__name__}
            ) from e

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            if isinstance(e, IntegrityError) and _is_unique_violation(e):
                raise AlreadyExistsError(
                    self.conflict_code, details={"table": self.model.__tablename__}
                ) from e
            raise InternalError(
                details={"table": self.model.__tablename__, "reason": type(e).__name__}
            ) from e


def _is_unique_violation(exc: IntegrityError) -> bool:
    error_msg = str(exc.orig).lower()
    return "unique" in error_msg or "duplicate" in error_msg
