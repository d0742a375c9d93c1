"""
Custom exceptions for the tourism content API.

Every failure that crosses the service boundary is one of these; the
handlers in app.core.error_handlers turn them into the response envelope.
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"

    # Authentication / authorization errors
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    FORBIDDEN = "FORBIDDEN"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Generic errors
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class TourismAPIException(Exception):
    """Base exception for the tourism content API."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class FieldViolation(dict):
    """One field and the messages it failed with: {"field": ..., "errors": [...]}."""

    def __init__(self, field: str, errors: List[str]):
        super().__init__(field=field, errors=list(errors))


class ValidationError(TourismAPIException):
    """Raised when input fails validation. Carries every violation, not just the first."""

    def __init__(
        self,
        message: str = "Validation failed",
        violations: Optional[List[Dict[str, Any]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        self.violations = [dict(v) for v in (violations or [])]
        super().__init__(
            message=message,
            error_code=error_code,
            details={"errors": self.violations} if self.violations else None,
            status_code=400
        )

    @classmethod
    def for_field(cls, field: str, *errors: str) -> "ValidationError":
        return cls(errors[0] if len(errors) == 1 else "Validation failed",
                   [FieldViolation(field, list(errors))])


class AuthenticationError(TourismAPIException):
    """Raised when the caller cannot be authenticated.

    ``reason`` is one of ``missing``, ``expired``, ``invalid``, ``failed`` or
    ``credentials`` so callers can tell an expired token from a forged one.
    """

    _codes = {
        "expired": ErrorCode.TOKEN_EXPIRED,
        "invalid": ErrorCode.TOKEN_INVALID,
    }

    def __init__(self, message: str = "Authentication required", reason: str = "failed"):
        self.reason = reason
        super().__init__(
            message=message,
            error_code=self._codes.get(reason, ErrorCode.AUTHENTICATION_FAILED),
            details={"reason": reason},
            status_code=401
        )


class AuthorizationError(TourismAPIException):
    """Raised when an authenticated caller lacks permission."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            error_code=ErrorCode.FORBIDDEN,
            status_code=403
        )


class NotFoundError(TourismAPIException):
    """Raised when a requested resource does not exist."""

    def __init__(self, message: str = "Resource not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.NOT_FOUND,
            details=details,
            status_code=404
        )

    @classmethod
    def for_entity(cls, entity_name: str, entity_id: Any) -> "NotFoundError":
        return cls(
            f"{entity_name} with id {entity_id} not found",
            details={"entity": entity_name, "id": entity_id},
        )


class ConflictError(TourismAPIException):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(self, message: str = "Resource already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFLICT,
            details=details,
            status_code=409
        )


class InternalError(TourismAPIException):
    """Raised when the store or another dependency fails unexpectedly."""

    def __init__(
        self,
        message: str = "Internal server error",
        error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=500
        )


# Location prefixes FastAPI adds in front of the actual field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def group_validation_errors(raw_errors) -> List[Dict[str, Any]]:
    """Collapse pydantic error dicts into [{"field": ..., "errors": [...]}] keeping order."""
    grouped: Dict[str, List[str]] = {}
    for error in raw_errors:
        loc = [str(part) for part in error.get('loc', ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = '.'.join(loc) or 'body'
        message = error.get('msg', 'Invalid value')
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        grouped.setdefault(field, []).append(message)
    return [{'field': field, 'errors': messages} for field, messages in grouped.items()]
