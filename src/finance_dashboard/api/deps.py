"""FastAPI dependency injection for authentication and database."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.core.exceptions import InvalidCredentialsError, TokenError
from finance_dashboard.core.security import TokenService, get_token_service
from finance_dashboard.db.session import get_db
from finance_dashboard.models.user import User
from finance_dashboard.repositories.category import CategoryRepository
from finance_dashboard.repositories.category_rule import CategoryRuleRepository
from finance_dashboard.repositories.transaction import TransactionRepository
from finance_dashboard.repositories.user import UserRepository
from finance_dashboard.services.auth import AuthService
from finance_dashboard.services.transaction import TransactionService

# Bearer token scheme
security = HTTPBearer()


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    """Get user repository instance."""
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository
        token_service: Token issuer/validator

    Returns:
        AuthService instance
    """
    return AuthService(user_repo, token_service)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionService:
    """Get transaction service instance sharing one session across its repositories."""
    return TransactionService(
        TransactionRepository(db),
        CategoryRepository(db),
        CategoryRuleRepository(db),
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Extract and validate user from the bearer access token.

    Raises:
        HTTPException: If the token is invalid, expired, malformed, a refresh
            token, or its user no longer exists
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user = await auth_service.get_current_user(credentials.credentials)
    except (TokenError, InvalidCredentialsError):
        raise credentials_exception

    # A plain string: a later rollback expires ORM instances on the session.
    request.state.user_id = str(user.id)
    return user
