"""Keyword rule endpoints (user-scoped)."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from finance_dashboard.api.deps import get_current_user, get_transaction_service
from finance_dashboard.models.user import User
from finance_dashboard.schemas.auth import MessageResponse
from finance_dashboard.schemas.category import CategoryRuleCreate, CategoryRuleResponse
from finance_dashboard.services.transaction import TransactionService

router = APIRouter(prefix="/category-rules", tags=["category-rules"])


@router.post(
    "",
    response_model=CategoryRuleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create keyword rule",
    description="""
    Create a rule that assigns a category to new transactions whose
    description contains the keyword (case-insensitive).

    Rules are checked oldest first; the first match wins.
    """,
    responses={
        404: {"description": "Category not found"},
        409: {"description": "Rule for this keyword already exists"},
    },
)
async def create_rule(
    payload: CategoryRuleCreate,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> CategoryRuleResponse:
    rule = await service.create_rule(current_user.id, payload.keyword, payload.category_id)
    return CategoryRuleResponse.model_validate(rule)


@router.get(
    "",
    response_model=list[CategoryRuleResponse],
    summary="List keyword rules",
)
async def list_rules(
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> list[CategoryRuleResponse]:
    rules = await service.get_rules(current_user.id)
    names = {c.id: c.name for c in await service.get_categories()}

    responses = []
    for rule in rules:
        response = CategoryRuleResponse.model_validate(rule)
        response.category = names.get(rule.category_id)
        responses.append(response)
    return responses


@router.delete(
    "/{rule_id}",
    response_model=MessageResponse,
    summary="Delete keyword rule",
    responses={404: {"description": "Rule not found"}},
)
async def delete_rule(
    rule_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> MessageResponse:
    await service.delete_rule(current_user.id, rule_id)
    return MessageResponse(message="rule deleted successfully")
