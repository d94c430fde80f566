"""Category reference endpoints."""

from fastapi import APIRouter, Depends

from finance_dashboard.api.deps import get_current_user, get_transaction_service
from finance_dashboard.models.user import User
from finance_dashboard.schemas.category import CategoryResponse
from finance_dashboard.services.transaction import TransactionService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
)
async def list_categories(
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> list[CategoryResponse]:
    categories = await service.get_categories()
    return [CategoryResponse.model_validate(c) for c in categories]
