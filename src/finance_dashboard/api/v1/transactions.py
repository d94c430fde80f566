"""Transaction endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from finance_dashboard.api.deps import get_current_user, get_transaction_service
from finance_dashboard.models.user import User
from finance_dashboard.repositories.transaction import TransactionFilter
from finance_dashboard.schemas.auth import MessageResponse
from finance_dashboard.schemas.transaction import (
    TransactionCreate,
    TransactionListResult,
    TransactionResponse,
    TransactionUpdate,
)
from finance_dashboard.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction",
    description="""
    Record a transaction. The category is assigned from your keyword rules;
    without a matching rule the transaction stays uncategorized and
    unconfirmed.
    """,
)
async def create_transaction(
    payload: TransactionCreate,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    txn = await service.create(current_user.id, payload)
    return TransactionResponse.model_validate(txn)


@router.get(
    "",
    response_model=TransactionListResult,
    summary="List transactions with filters",
    description="""
    ## Filters
    - **category_id**: Filter by category
    - **from_date**, **to_date**: Date range filter (inclusive)

    Results are newest first; **total** counts every match regardless of
    **limit** / **offset**.
    """,
)
async def list_transactions(
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page (1-100)")] = 20,
    offset: Annotated[int, Query(ge=0, description="Items to skip")] = 0,
    category_id: Annotated[int | None, Query(description="Filter by category ID")] = None,
    from_date: Annotated[date | None, Query(description="Filter from date (inclusive)")] = None,
    to_date: Annotated[date | None, Query(description="Filter to date (inclusive)")] = None,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResult:
    filter = TransactionFilter(
        user_id=current_user.id,
        category_id=category_id,
        from_date=from_date,
        to_date=to_date,
        limit=limit,
        offset=offset,
    )
    transactions, total = await service.list_transactions(filter)

    return TransactionListResult(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def get_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    txn = await service.get(current_user.id, transaction_id)
    return TransactionResponse.model_validate(txn)


@router.patch(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Update transaction",
    description="""
    Partially update a transaction. Setting **category_id** categorizes it
    manually (confirmed); changing only the description re-applies your
    keyword rules.
    """,
    responses={404: {"description": "Transaction or category not found"}},
)
async def update_transaction(
    transaction_id: UUID,
    payload: TransactionUpdate,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    txn = await service.update(current_user.id, transaction_id, payload)
    return TransactionResponse.model_validate(txn)


@router.delete(
    "/{transaction_id}",
    response_model=MessageResponse,
    summary="Delete transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def delete_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> MessageResponse:
    await service.delete(current_user.id, transaction_id)
    return MessageResponse(message="transaction deleted successfully")
