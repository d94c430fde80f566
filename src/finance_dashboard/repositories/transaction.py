"""Transaction repository with filtering and pagination queries."""
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.models.transaction import Transaction
from finance_dashboard.repositories.base import BaseRepository


@dataclass
class TransactionFilter:
    """Listing parameters for a user's transactions."""

    user_id: UUID
    category_id: int | None = None
    from_date: date | None = None
    to_date: date | None = None
    limit: int = 20
    offset: int = 0


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_by_user(self, filter: TransactionFilter) -> list[Transaction]:
        """Get one page of a user's transactions, newest first."""
        query = (
            self._filtered(filter)
            .order_by(Transaction.txn_date.desc(), Transaction.created_at.desc())
            .offset(filter.offset)
            .limit(filter.limit)
        )
        result = await self._execute(query)
        return list(result.scalars().all())

    async def count_by_user(self, filter: TransactionFilter) -> int:
        """Count all transactions matching the filter, ignoring the page window."""
        query = select(func.count()).select_from(self._filtered(filter).subquery())
        result = await self._execute(query)
        return result.scalar() or 0

    def _filtered(self, filter: TransactionFilter) -> Select:
        query = select(Transaction).where(Transaction.user_id == filter.user_id)
        if filter.category_id is not None:
            query = query.where(Transaction.category_id == filter.category_id)
        if filter.from_date:
            query = query.where(Transaction.txn_date >= filter.from_date)
        if filter.to_date:
            query = query.where(Transaction.txn_date <= filter.to_date)
        return query
