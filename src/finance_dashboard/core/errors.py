"""Error codes and user-friendly messages.

This module defines the error catalog for the finance dashboard.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    # Identity
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "User already exists",
        "user_message": "An account with this email already exists.",
        "suggestion": "Log in instead, or use a different email address.",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Invalid credentials",
        "user_message": "Incorrect email or password.",
        "suggestion": "Check your credentials and try again.",
        "retry_allowed": True,
    },
    # Tokens
    "TOKEN_001": {
        "code": "TOKEN_001",
        "message": "Token signature or type is invalid",
        "user_message": "Your session is not valid.",
        "suggestion": "Please log in again.",
        "retry_allowed": False,
    },
    "TOKEN_002": {
        "code": "TOKEN_002",
        "message": "Token expired",
        "user_message": "Your session has expired.",
        "suggestion": "Refresh your session or log in again.",
        "retry_allowed": False,
    },
    "TOKEN_003": {
        "code": "TOKEN_003",
        "message": "Token claims could not be decoded",
        "user_message": "Your session is not valid.",
        "suggestion": "Please log in again.",
        "retry_allowed": False,
    },
    # Transactions
    "TXN_001": {
        "code": "TXN_001",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Access denied: transaction belongs to different user",
        # Deliberately identical to TXN_001 for outside callers.
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    # Categories and rules
    "CAT_001": {
        "code": "CAT_001",
        "message": "Category not found",
        "user_message": "That category doesn't exist.",
        "suggestion": "Please choose a category from the list.",
        "retry_allowed": False,
    },
    "RULE_001": {
        "code": "RULE_001",
        "message": "Category rule not found",
        "user_message": "We couldn't find this rule.",
        "suggestion": "Please refresh your rules and try again.",
        "retry_allowed": False,
    },
    "RULE_002": {
        "code": "RULE_002",
        "message": "Access denied: rule belongs to different user",
        "user_message": "We couldn't find this rule.",
        "suggestion": "Please refresh your rules and try again.",
        "retry_allowed": False,
    },
    "RULE_003": {
        "code": "RULE_003",
        "message": "Rule for this keyword already exists",
        "user_message": "You already have a rule for this keyword.",
        "suggestion": "Delete the existing rule first, or pick another keyword.",
        "retry_allowed": False,
    },
    # Infrastructure
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists.",
        "suggestion": "Please check if the record was already created.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": True,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred.",
        "suggestion": "Please try again later or contact support.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details. Unknown codes yield a generic definition.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]

