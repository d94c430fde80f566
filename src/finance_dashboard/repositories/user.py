"""User repository: the credential store."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.models.user import User
from finance_dashboard.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with authentication queries."""

    conflict_code = "AUTH_001"

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email address (exact, case-sensitive match)."""
        result = await self._execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_google_id(self, google_id: str) -> User | None:
        """Find user by federated Google id."""
        result = await self._execute(select(User).where(User.google_id == google_id))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        result = await self._execute(select(User.id).where(User.email == email))
        return result.scalar_one_or_none() is not None
