"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """Request model for user registration."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class LoginRequest(BaseModel):
    """Request model for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class GoogleLoginRequest(BaseModel):
    """Request model for federated login with a verified Google identity."""

    google_id: str = Field(..., min_length=1, description="Provider-issued user id")
    email: EmailStr = Field(..., description="Email reported by the provider")


class TokenPair(BaseModel):
    """Access + refresh tokens."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")


class RefreshRequest(BaseModel):
    """Request model for token refresh."""

    refresh_token: str = Field(..., description="JWT refresh token")


class UserResponse(BaseModel):
    """User data without credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    global_currency: str
    created_at: datetime


class AuthResponse(TokenPair):
    """Tokens plus the authenticated user."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str
