"""Category rule repository: the rule store."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.models.category_rule import UserCategoryRule
from finance_dashboard.repositories.base import BaseRepository


class CategoryRuleRepository(BaseRepository[UserCategoryRule]):
    """Repository for user keyword rules.

    create() raises AlreadyExistsError when (user_id, keyword) is taken; the
    unique constraint makes this hold under concurrent inserts too.
    """

    conflict_code = "RULE_003"

    def __init__(self, db: AsyncSession):
        super().__init__(db, UserCategoryRule)

    async def get_by_user(self, user_id: UUID) -> list[UserCategoryRule]:
        """Get all rules of a user in stable order (oldest first)."""
        result = await self._execute(
            select(UserCategoryRule)
            .where(UserCategoryRule.user_id == user_id)
            .order_by(UserCategoryRule.created_at, UserCategoryRule.id)
        )
        return list(result.scalars().all())

    async def get_by_keyword(self, user_id: UUID, keyword: str) -> UserCategoryRule | None:
        """Find a user's rule by its exact keyword."""
        result = await self._execute(
            select(UserCategoryRule).where(
                UserCategoryRule.user_id == user_id,
                UserCategoryRule.keyword == keyword,
            )
        )
        return result.scalar_one_or_none()
