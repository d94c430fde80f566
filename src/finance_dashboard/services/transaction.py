"""Transaction service: creation with categorization, ownership checks, rules."""

import logging
from typing import Any
from uuid import UUID

from finance_dashboard.categorization.rules import categorize
from finance_dashboard.core.exceptions import NotFoundError, UnauthorizedError
from finance_dashboard.models.category import Category
from finance_dashboard.models.category_rule import UserCategoryRule
from finance_dashboard.models.transaction import Transaction
from finance_dashboard.repositories.category import CategoryRepository
from finance_dashboard.repositories.category_rule import CategoryRuleRepository
from finance_dashboard.repositories.transaction import TransactionFilter, TransactionRepository
from finance_dashboard.schemas.transaction import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = {"amount", "currency", "description", "txn_date"}


class TransactionService:
    """Service layer for transactions, categories and keyword rules."""

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
        rule_repo: CategoryRuleRepository,
    ):
        self.transaction_repo = transaction_repo
        self.category_repo = category_repo
        self.rule_repo = rule_repo

    async def create(self, user_id: UUID, data: TransactionCreate) -> Transaction:
        """Create a transaction owned by user_id.

        Categorization finishes before anything is written, so a stored
        transaction is never half-categorized.

        Args:
            user_id: Owner
            data: Transaction fields from the caller

        Returns:
            The persisted transaction
        """
        txn = Transaction(user_id=user_id, **_column_values(data.model_dump()))
        await self.categorize(user_id, txn)

        created = await self.transaction_repo.create(txn)
        logger.info(
            "Transaction created",
            extra={
                "user_id": str(user_id),
                "transaction_id": str(created.id),
                "is_confirmed": created.is_confirmed,
            },
        )
        return created

    async def get(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        """Get a transaction, enforcing ownership.

        Raises:
            NotFoundError: No transaction has this id
            UnauthorizedError: The transaction belongs to another user
        """
        txn = await self.transaction_repo.get_by_id(transaction_id)
        if txn is None:
            raise NotFoundError("TXN_001")

        if txn.user_id != user_id:
            raise UnauthorizedError("TXN_002")

        return txn

    async def list_transactions(self, filter: TransactionFilter) -> tuple[list[Transaction], int]:
        """List a user's transactions.

        Returns:
            The requested page and the total number of matching transactions
        """
        transactions = await self.transaction_repo.get_by_user(filter)
        total = await self.transaction_repo.count_by_user(filter)
        return transactions, total

    async def update(
        self, user_id: UUID, transaction_id: UUID, changes: TransactionUpdate
    ) -> Transaction:
        """Apply a partial update to a transaction the user owns.

        An explicit category_id is a manual choice and is confirmed (or
        cleared when null). A new description without an explicit category
        re-runs keyword categorization.

        Raises:
            NotFoundError: No such transaction, or unknown category_id
            UnauthorizedError: The transaction belongs to another user
        """
        txn = await self.get(user_id, transaction_id)
        values = changes.model_dump(exclude_unset=True)

        manual_category = "category_id" in values
        category_id = values.pop("category_id", None)
        if category_id is not None:
            await self._require_category(category_id)
        description_changed = (
            values.get("description") is not None
            and values["description"] != txn.description
        )

        for key, value in _column_values(values).items():
            if value is None and key in _REQUIRED_FIELDS:
                continue
            setattr(txn, key, value)

        if manual_category:
            txn.category_id = category_id
            txn.is_confirmed = category_id is not None
        elif description_changed:
            await self.categorize(user_id, txn)

        return await self.transaction_repo.save(txn)

    async def delete(self, user_id: UUID, transaction_id: UUID) -> None:
        """Delete a transaction the user owns.

        Raises:
            NotFoundError: No transaction has this id
            UnauthorizedError: The transaction belongs to another user
        """
        txn = await self.get(user_id, transaction_id)
        await self.transaction_repo.delete(txn.id)

    async def categorize(self, user_id: UUID, txn: Transaction) -> None:
        """Assign a category to txn from the user's keyword rules.

        Empty descriptions are left uncategorized without reading any rules.
        Unmatched descriptions stay uncategorized and unconfirmed.
        """
        if not txn.description:
            txn.category_id = None
            txn.is_confirmed = False
            return

        rules = await self.rule_repo.get_by_user(user_id)
        result = categorize(txn.description, rules)
        txn.category_id = result.category_id
        txn.is_confirmed = result.is_confirmed

    async def create_rule(self, user_id: UUID, keyword: str, category_id: int) -> UserCategoryRule:
        """Create a keyword rule for the user.

        Raises:
            NotFoundError: The category does not exist
            AlreadyExistsError: The user already has a rule for this keyword
        """
        await self._require_category(category_id)

        rule = await self.rule_repo.create(
            UserCategoryRule(user_id=user_id, keyword=keyword, category_id=category_id)
        )
        logger.info(
            "Category rule created",
            extra={"user_id": str(user_id), "rule_id": str(rule.id), "category_id": category_id},
        )
        return rule

    async def get_rules(self, user_id: UUID) -> list[UserCategoryRule]:
        """Get the user's rules in the order categorization scans them."""
        return await self.rule_repo.get_by_user(user_id)

    async def delete_rule(self, user_id: UUID, rule_id: UUID) -> None:
        """Delete one of the user's rules.

        Raises:
            NotFoundError: No rule has this id
            UnauthorizedError: The rule belongs to another user
        """
        rule = await self.rule_repo.get_by_id(rule_id)
        if rule is None:
            raise NotFoundError("RULE_001")

        if rule.user_id != user_id:
            raise UnauthorizedError("RULE_002")

        await self.rule_repo.delete(rule.id)
        logger.info("Category rule deleted", extra={"user_id": str(user_id), "rule_id": str(rule_id)})

    async def get_categories(self) -> list[Category]:
        """Get all categories."""
        return await self.category_repo.get_all()

    async def _require_category(self, category_id: int) -> Category:
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError("CAT_001", details={"category_id": category_id})
        return category


def _column_values(values: dict[str, Any]) -> dict[str, Any]:
    # Currency arrives as an enum member; the column stores the plain code.
    if values.get("currency") is not None:
        values["currency"] = getattr(values["currency"], "value", values["currency"])
    return values
