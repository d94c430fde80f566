"""User model for authentication and data ownership."""
from enum import Enum

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from finance_dashboard.models.base import BaseModel


class Currency(str, Enum):
    """ISO 4217 currency codes accepted by the dashboard."""

    RUB = "RUB"
    USD = "USD"
    EUR = "EUR"


class User(BaseModel):
    """User model.

    A user is anchored by a password hash, a federated (Google) id, or both
    once the two have been linked. At least one anchor is always present.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "password_hash IS NOT NULL OR google_id IS NOT NULL",
            name="ck_users_auth_method",
        ),
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    google_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True, index=True)
    global_currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default=Currency.RUB.value
    )

    # Rely on DB-level ON DELETE CASCADE; prevent SQLAlchemy from NULLing FKs on delete.
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="user", lazy="raise", passive_deletes="all"
    )
    category_rules: Mapped[list["UserCategoryRule"]] = relationship(
        "UserCategoryRule", back_populates="user", lazy="raise", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, has_password={self.password_hash is not None}, has_google={self.google_id is not None})>"
