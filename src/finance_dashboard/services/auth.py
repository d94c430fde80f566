"""Authentication service with business logic.

Owns the lifecycle of a user's authentication anchors:
NoAccount -> PasswordOnly | FederatedOnly -> Linked (password + Google id).
"""

import logging
from uuid import UUID

from finance_dashboard.config import settings
from finance_dashboard.core.exceptions import (
    AlreadyExistsError,
    InvalidCredentialsError,
    TokenMalformedError,
)
from finance_dashboard.core.security import TokenService, hash_password, verify_password
from finance_dashboard.models.user import User
from finance_dashboard.repositories.user import UserRepository
from finance_dashboard.schemas.auth import TokenPair

logger = logging.getLogger(__name__)


class AuthService:
    """Service for registration, login and token issuance."""

    def __init__(self, user_repo: UserRepository, token_service: TokenService):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository (credential store)
            token_service: Issues and validates tokens
        """
        self.user_repo = user_repo
        self.token_service = token_service

    async def register(self, email: str, password: str) -> User:
        """
        Register a new password-based user.

        Args:
            email: User email address
            password: Plain text password

        Returns:
            Created user object

        Raises:
            AlreadyExistsError: If the email is taken (checked here, and
                enforced by the store's unique constraint under races)
        """
        if await self.user_repo.email_exists(email):
            raise AlreadyExistsError("AUTH_001")

        user = User(
            email=email,
            password_hash=hash_password(password),
            google_id=None,
            global_currency=settings.default_currency,
        )

        created_user = await self.user_repo.create(user)
        logger.info("User registered", extra={"user_id": str(created_user.id)})
        return created_user

    async def login(self, email: str, password: str) -> User:
        """
        Authenticate a user by email and password.

        Raises:
            InvalidCredentialsError: Unknown email, federated-only account, or
                wrong password. The three cases are indistinguishable.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or user.password_hash is None:
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user

    async def login_with_google(self, google_id: str, email: str) -> User:
        """
        Authenticate through Google, creating or linking the account as needed.

        1. A user already anchored by google_id is returned unchanged.
        2. Otherwise a user with this email gets google_id linked onto it,
           replacing any Google id linked before.
        3. Otherwise a new federated-only user is created.

        Raises:
            AlreadyExistsError: A concurrent request created the same user.
        """
        user = await self.user_repo.get_by_google_id(google_id)
        if user is not None:
            return user

        user = await self.user_repo.get_by_email(email)
        if user is not None:
            user.google_id = google_id
            user = await self.user_repo.save(user)
            logger.info("Linked Google account to existing user", extra={"user_id": str(user.id)})
            return user

        user = User(
            email=email,
            password_hash=None,
            google_id=google_id,
            global_currency=settings.default_currency,
        )
        created_user = await self.user_repo.create(user)
        logger.info("User registered via Google", extra={"user_id": str(created_user.id)})
        return created_user

    def generate_tokens(self, user: User) -> TokenPair:
        """Issue an access/refresh token pair for the user."""
        return TokenPair(
            access_token=self.token_service.issue_access_token(str(user.id), user.email),
            refresh_token=self.token_service.issue_refresh_token(str(user.id)),
        )

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """
        Generate a new token pair from a valid refresh token.

        Raises:
            TokenError: If the refresh token fails validation
            InvalidCredentialsError: If the user no longer exists
        """
        user_id = self.token_service.validate_refresh_token(refresh_token)
        user = await self.user_repo.get_by_id(_parse_user_id(user_id))
        if user is None:
            raise InvalidCredentialsError()

        return self.generate_tokens(user)

    async def get_current_user(self, access_token: str) -> User:
        """
        Resolve the user behind an access token.

        Raises:
            TokenError: If the access token fails validation
            InvalidCredentialsError: If the user no longer exists
        """
        claims = self.token_service.validate_access_token(access_token)
        user = await self.user_repo.get_by_id(_parse_user_id(claims.user_id))
        if user is None:
            raise InvalidCredentialsError()

        return user


def _parse_user_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as e:
        raise TokenMalformedError(details={"reason": "subject is not a UUID"}) from e
