"""Database models."""
from finance_dashboard.models.user import Currency, User
from finance_dashboard.models.category import DEFAULT_CATEGORIES, Category
from finance_dashboard.models.category_rule import UserCategoryRule
from finance_dashboard.models.transaction import Transaction

__all__ = [
    "Currency",
    "User",
    "Category",
    "DEFAULT_CATEGORIES",
    "UserCategoryRule",
    "Transaction",
]
