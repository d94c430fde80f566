"""Authentication endpoints for registration, login, and token management."""

from fastapi import APIRouter, Depends, status

from finance_dashboard.api.deps import get_auth_service, get_current_user
from finance_dashboard.models.user import User
from finance_dashboard.schemas.auth import (
    AuthResponse,
    GoogleLoginRequest,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    TokenPair,
    UserRegister,
    UserResponse,
)
from finance_dashboard.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(auth_service: AuthService, user: User) -> AuthResponse:
    tokens = auth_service.generate_tokens(user)
    return AuthResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a new account with email and password and receive tokens.",
)
async def register(
    data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new user account.

    Raises:
        409: Email already registered
        400: Validation error
    """
    user = await auth_service.register(email=data.email, password=data.password)
    return _auth_response(auth_service, user)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="User login",
    description="Authenticate with email and password to receive JWT tokens.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Authenticate user and return JWT tokens.

    Raises:
        401: Invalid credentials
    """
    user = await auth_service.login(email=data.email, password=data.password)
    return _auth_response(auth_service, user)


@router.post(
    "/google",
    response_model=AuthResponse,
    summary="Federated login",
    description="Log in with a verified Google identity, creating or linking the account.",
)
async def login_with_google(
    data: GoogleLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Authenticate through Google.

    An existing account with the same email is linked to this Google id,
    replacing any earlier link.
    """
    user = await auth_service.login_with_google(google_id=data.google_id, email=data.email)
    return _auth_response(auth_service, user)


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh access token",
    description="Get new token pair using a valid refresh token.",
)
async def refresh(
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """
    Generate new token pair using refresh token.

    Raises:
        401: Invalid, expired or malformed refresh token
    """
    return await auth_service.refresh_tokens(data.refresh_token)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
    description="Tokens are stateless; the client discards them.",
)
async def logout() -> MessageResponse:
    return MessageResponse(message="logged out successfully")


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
    description="Get authenticated user's profile information.",
)
async def get_me(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    """Get current authenticated user's profile."""
    return UserResponse.model_validate(current_user)
