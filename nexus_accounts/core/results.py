"""
Account Service — Structured result decorator

Wraps public operations so the taxonomy errors never cross the API
boundary: the caller receives an OperationResult instead.

Usage:
    @returns_result
    def approve(self, account_id, actor_id=None):
        ...
"""
import functools
import logging

from pydantic import ValidationError as PydanticValidationError

from nexus_accounts.core.errors import AccountError, AuthError, StorageError, ValidationError
from nexus_accounts.schemas.accounts import OperationResult

logger = logging.getLogger(__name__)


def describe_errors(errors) -> str:
    """One-line summary of the first pydantic error."""
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "request"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


def returns_result(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> OperationResult:
        try:
            value = func(*args, **kwargs)
        except PydanticValidationError as exc:
            error = ValidationError(describe_errors(exc.errors()))
        except AccountError as exc:
            error = exc
        else:
            if isinstance(value, OperationResult):
                return value
            return OperationResult.ok(value)

        if isinstance(error, StorageError):
            logger.warning("%s failed: %s", func.__name__, error.message)
        elif isinstance(error, AuthError):
            logger.info("%s denied (%s): %s", func.__name__, error.reason.value, error.message)
        else:
            logger.info("%s failed [%s]: %s", func.__name__, error.code, error.message)
        return OperationResult.fail(error)

    return wrapper
