"""Unit tests for database failure translation in the repositories."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.core.exceptions import AlreadyExistsError, InternalError
from finance_dashboard.models.user import User
from finance_dashboard.repositories.category_rule import CategoryRuleRepository
from finance_dashboard.repositories.user import UserRepository


@pytest.fixture
def session():
    """Create a mock async session."""
    return AsyncMock(spec=AsyncSession)


class TestReadFailures:
    @pytest.mark.asyncio
    async def test_lookup_failure_is_internal(self, session):
        session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )
        repo = UserRepository(session)

        with pytest.raises(InternalError) as exc_info:
            await repo.get_by_email("user@example.com")

        assert exc_info.value.error_code == "DB_001"
        assert exc_info.value.http_status == 500
        assert exc_info.value.details["table"] == "users"

    @pytest.mark.asyncio
    async def test_rule_listing_failure_is_internal(self, session):
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        repo = CategoryRuleRepository(session)

        with pytest.raises(InternalError):
            await repo.get_by_user(uuid4())


class TestCommitFailures:
    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self, session):
        session.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: users.email")
        )
        repo = UserRepository(session)

        with pytest.raises(AlreadyExistsError) as exc_info:
            await repo.create(User(email="dup@example.com"))

        assert exc_info.value.error_code == "AUTH_001"
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_integrity_error_is_internal(self, session):
        session.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: users.email")
        )
        repo = UserRepository(session)

        with pytest.raises(InternalError):
            await repo.create(User(email=None))

        session.rollback.assert_awaited_once()
        session.refresh.assert_not_called()

    @pytest.mark.asyncio
    async def test_connection_loss_on_commit_is_internal(self, session):
        session.commit.side_effect = OperationalError("COMMIT", {}, Exception("gone away"))
        repo = UserRepository(session)

        with pytest.raises(InternalError):
            await repo.create(User(email="lost@example.com"))

        session.rollback.assert_awaited_once()
