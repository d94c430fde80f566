"""Transaction request/response schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from finance_dashboard.models.user import Currency


class TransactionCreate(BaseModel):
    """Request to record a transaction. Category is assigned by the server."""

    amount: Decimal = Field(
        ..., max_digits=14, decimal_places=2, description="Transaction amount"
    )
    currency: Currency = Field(..., description="ISO 4217 code")
    description: str = Field("", max_length=500, description="Free-text description")
    txn_date: date = Field(..., description="Transaction date")
    place_name: str | None = Field(None, max_length=255)
    place_lat: float | None = Field(None, ge=-90, le=90)
    place_lon: float | None = Field(None, ge=-180, le=180)


class TransactionUpdate(BaseModel):
    """Partial update. Only fields that are sent are changed.

    Sending category_id is a manual categorization: a value confirms it,
    null clears it.
    """

    amount: Decimal | None = Field(None, max_digits=14, decimal_places=2)
    currency: Currency | None = None
    description: str | None = Field(None, max_length=500)
    txn_date: date | None = None
    place_name: str | None = Field(None, max_length=255)
    place_lat: float | None = Field(None, ge=-90, le=90)
    place_lon: float | None = Field(None, ge=-180, le=180)
    category_id: int | None = Field(None, gt=0)


class TransactionResponse(BaseModel):
    """Transaction as returned to the owner."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    amount: Decimal
    currency: str
    description: str
    txn_date: date
    place_name: str | None
    place_lat: float | None
    place_lon: float | None
    category_id: int | None
    is_confirmed: bool
    created_at: datetime
    updated_at: datetime


class TransactionListResult(BaseModel):
    """One page of transactions plus the unpaged total."""

    transactions: list[TransactionResponse]
    total: int
    limit: int
    offset: int
