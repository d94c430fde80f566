"""Domain exception hierarchy.

Every exception carries an error_code from the catalog in errors.py and the
HTTP status the transport layer should answer with. Services raise these;
the API error handler renders them.
"""

from typing import Any


class FinanceDashboardError(Exception):
    """Base exception for all domain errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "AUTH_002")
        details: Additional context about the error (for logging only)
        http_status: HTTP status code to return (default: 500)
    """

    default_code = "SYS_001"
    default_status = 500

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(self.error_code)


class NotFoundError(FinanceDashboardError):
    """Raised when an entity truly does not exist."""

    default_code = "TXN_001"
    default_status = 404


class AlreadyExistsError(FinanceDashboardError):
    """Raised on a duplicate unique key (email, federated id, rule keyword).

    The store's unique constraint is the authoritative source of this error,
    so concurrent check-then-create races still end here.
    """

    default_code = "DB_002"
    default_status = 409


class InvalidCredentialsError(FinanceDashboardError):
    """Raised on any authentication failure.

    Never says which check failed (unknown email, no password, bad password).
    """

    default_code = "AUTH_002"
    default_status = 401


class UnauthorizedError(FinanceDashboardError):
    """Raised when a caller touches an entity owned by another user.

    Rendered to outside callers exactly like NotFoundError.
    """

    default_code = "TXN_002"
    default_status = 404


class TokenError(FinanceDashboardError):
    """Base class for token validation failures."""

    default_code = "TOKEN_001"
    default_status = 401


class TokenInvalidError(TokenError):
    """Bad signature, unexpected algorithm, or a token of the wrong kind."""

    default_code = "TOKEN_001"


class TokenExpiredError(TokenError):
    """Token is past its expiry."""

    default_code = "TOKEN_002"


class TokenMalformedError(TokenError):
    """Token cannot be decoded or lacks required claims."""

    default_code = "TOKEN_003"


class InternalError(FinanceDashboardError):
    """Store or infrastructure failure."""

    default_code = "DB_001"
    default_status = 500
