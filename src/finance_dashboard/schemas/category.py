"""Schemas for categories and user keyword rules."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CategoryResponse(BaseModel):
    """Category reference entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_default: bool


class CategoryRuleCreate(BaseModel):
    """Request to create a keyword rule."""

    keyword: str = Field(..., min_length=1, max_length=255, description="Substring to look for in descriptions")
    category_id: int = Field(..., gt=0, description="Category assigned on match")


class CategoryRuleResponse(BaseModel):
    """Keyword rule."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    keyword: str
    category_id: int
    category: str | None = None
    created_at: datetime
