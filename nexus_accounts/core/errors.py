"""
Account Service — Error taxonomy

Every failure the core reports to callers is an AccountError subclass with a
stable `code`. AccountService converts them into OperationResult failures.
"""
from enum import Enum


class AccountError(Exception):
    """Base class for every error surfaced by the account core."""

    code: str = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccountError):
    """Duplicate email or a missing required profile field for a role."""

    code = "validation"


class NotFoundError(AccountError):
    code = "not_found"


class InvalidTransitionError(AccountError):
    """The requested status change is not legal from the current status."""

    code = "invalid_transition"


class AuthFailureReason(str, Enum):
    PENDING = "pending"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    INVALID_CREDENTIALS = "invalid_credentials"


class AuthError(AccountError):
    """Sign-in denied. `reason` tells the UI which message family applies."""

    code = "auth"

    def __init__(self, message: str, reason: AuthFailureReason = AuthFailureReason.INVALID_CREDENTIALS):
        super().__init__(message)
        self.reason = reason


class PermissionDeniedError(AccountError):
    """The acting principal does not outrank the target role."""

    code = "permission"


class StorageError(AccountError):
    """The key-value store could not be read or written."""

    code = "storage"
