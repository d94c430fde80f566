"""Category repository (read-only reference data)."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.models.category import DEFAULT_CATEGORIES, Category
from finance_dashboard.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def get_all(self, skip: int = 0, limit: int = 1000) -> list[Category]:
        """Get all categories ordered by id."""
        return await super().get_all(skip, limit)

    async def get_defaults(self) -> list[Category]:
        """Get system-provided default categories."""
        result = await self._execute(
            select(Category).where(Category.is_default == True).order_by(Category.id)
        )
        return list(result.scalars().all())


async def seed_default_categories(db: AsyncSession) -> list[Category]:
    """Insert any missing default categories and return all defaults."""
    existing = set((await db.execute(select(Category.name))).scalars().all())
    for name in DEFAULT_CATEGORIES:
        if name not in existing:
            db.add(Category(name=name, is_default=True))
    await db.commit()
    return await CategoryRepository(db).get_defaults()
