"""Security utilities for password hashing and JWT token management."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable
from uuid import uuid4

from jose import JWTError, jwt
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext

from finance_dashboard.config import settings
from finance_dashboard.core.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
)

# Password hashing with Argon2. Cost parameters are fixed here, not per call.
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Password to verify
        hashed_password: Stored password hash

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


@dataclass(frozen=True)
class AccessTokenClaims:
    """Decoded claims of a valid access token."""

    user_id: str
    email: str
    token_id: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and validates stateless access and refresh tokens.

    Access and refresh tokens carry different claim sets and are checked
    through separate entry points, so neither can stand in for the other.
    """

    def __init__(
        self,
        secret_key: str,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        algorithm: str = "HS256",
        now: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the token service.

        Args:
            secret_key: Shared HMAC secret
            access_ttl: Lifetime of access tokens
            refresh_ttl: Lifetime of refresh tokens
            algorithm: JWS algorithm used for signing and required on validation
            now: Clock returning an aware UTC datetime (defaults to wall clock)
        """
        self.secret_key = secret_key
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm
        self._now = now or _utcnow

    def issue_access_token(self, user_id: str, email: str) -> str:
        """
        Create a signed access token.

        Args:
            user_id: User ID to embed
            email: User email to embed

        Returns:
            Encoded JWT access token
        """
        issued_at, expires_at = self._lifetime(self.access_ttl)
        claims = {
            "user_id": str(user_id),
            "email": email,
            "jti": str(uuid4()),
            "iat": issued_at,
            "nbf": issued_at,
            "exp": expires_at,
            "type": ACCESS_TOKEN_TYPE,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def issue_refresh_token(self, user_id: str) -> str:
        """
        Create a signed refresh token. Carries no email.

        Args:
            user_id: User ID, stored as the subject

        Returns:
            Encoded JWT refresh token
        """
        issued_at, expires_at = self._lifetime(self.refresh_ttl)
        claims = {
            "sub": str(user_id),
            "jti": str(uuid4()),
            "iat": issued_at,
            "exp": expires_at,
            "type": REFRESH_TOKEN_TYPE,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def _lifetime(self, ttl: timedelta) -> tuple[datetime, datetime]:
        # Time claims are whole seconds: iat rounds down and exp rounds up,
        # so a token is never valid for less than its full ttl.
        now = self._now()
        issued_at = now.replace(microsecond=0)
        expires_at = now + ttl
        if expires_at.microsecond:
            expires_at = expires_at.replace(microsecond=0) + timedelta(seconds=1)
        return issued_at, expires_at

    def validate_access_token(self, token: str) -> AccessTokenClaims:
        """
        Validate an access token and return its claims.

        Raises:
            TokenInvalidError: Bad signature/algorithm, or not an access token
            TokenExpiredError: Token is past its expiry
            TokenMalformedError: Token or claims cannot be decoded
        """
        claims = self._decode(token, ACCESS_TOKEN_TYPE)
        try:
            return AccessTokenClaims(
                user_id=_require_str(claims, "user_id"),
                email=_require_str(claims, "email"),
                token_id=_require_str(claims, "jti"),
                issued_at=_timestamp(claims, "iat"),
                not_before=_timestamp(claims, "nbf"),
                expires_at=_timestamp(claims, "exp"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TokenMalformedError(details={"reason": str(e)}) from e

    def validate_refresh_token(self, token: str) -> str:
        """
        Validate a refresh token and return the user ID it was issued for.

        Raises:
            TokenInvalidError: Bad signature/algorithm, or not a refresh token
            TokenExpiredError: Token is past its expiry
            TokenMalformedError: Token or claims cannot be decoded
        """
        claims = self._decode(token, REFRESH_TOKEN_TYPE)
        try:
            _require_str(claims, "jti")
            return _require_str(claims, "sub")
        except (KeyError, TypeError) as e:
            raise TokenMalformedError(details={"reason": str(e)}) from e

    def _decode(self, token: str, expected_type: str) -> dict[str, Any]:
        try:
            header = jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenMalformedError(details={"reason": "undecodable"}) from e

        if header.get("alg") != self.algorithm:
            raise TokenInvalidError(details={"reason": "algorithm_mismatch"})

        # Time claims are checked against our own clock below.
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_nbf": False},
            )
        except JWTClaimsError as e:
            raise TokenMalformedError(details={"reason": "claims"}) from e
        except JWTError as e:
            raise TokenInvalidError(details={"reason": "signature"}) from e

        if claims.get("type") != expected_type:
            raise TokenInvalidError(details={"reason": "token_type_mismatch"})

        now = self._now().timestamp()
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            raise TokenMalformedError(details={"reason": "missing exp"})
        if now >= exp:
            raise TokenExpiredError()

        nbf = claims.get("nbf")
        if isinstance(nbf, (int, float)) and now < nbf:
            raise TokenInvalidError(details={"reason": "not_yet_valid"})

        return claims


def _require_str(claims: dict[str, Any], name: str) -> str:
    value = claims[name]
    if not isinstance(value, str) or not value:
        raise TypeError(f"claim '{name}' must be a non-empty string")
    return value


def _timestamp(claims: dict[str, Any], name: str) -> datetime:
    value = claims[name]
    if not isinstance(value, (int, float)):
        raise TypeError(f"claim '{name}' must be numeric")
    return datetime.fromtimestamp(value, tz=timezone.utc)


@lru_cache
def get_token_service() -> TokenService:
    """Get the token service configured from settings."""
    return TokenService(
        secret_key=settings.jwt_secret,
        access_ttl=timedelta(minutes=settings.jwt_access_expire_minutes),
        refresh_ttl=timedelta(hours=settings.jwt_refresh_expire_hours),
        algorithm=settings.jwt_algorithm,
    )
