"""User-defined keyword -> category rules.

Rules are user-scoped: each user maintains their own keywords, and a keyword
can appear at most once per user.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from finance_dashboard.models.base import BaseModel


class UserCategoryRule(BaseModel):
    """Assign category_id to any transaction whose description contains keyword."""

    __tablename__ = "user_category_rules"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    keyword: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "keyword", name="uq_rule_user_keyword"),
        Index("ix_rule_user_id_created_at", "user_id", "created_at"),
    )

    user: Mapped["User"] = relationship("User", back_populates="category_rules")

    def __repr__(self) -> str:
        return (
            f"<UserCategoryRule(id={self.id}, user_id={self.user_id}, "
            f"keyword={self.keyword}, category_id={self.category_id})>"
        )
