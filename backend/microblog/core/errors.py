"""Error Hierarchy — typed, categorized exceptions for every microblog failure kind.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Business-rule kinds (validation, not-found, conflict, self-reference) are
      deterministic and never retried
    - Persistence failures surface as DatabaseError, distinct from business kinds
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with MicroblogError base: transport maps category → status
      without knowing individual kinds
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    SELF_REFERENCE = "self_reference"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    username: str | None = None
    post_id: str | None = None
    debug_info: dict[str, Any] | None = None


class MicroblogError(Exception):
    """Base exception for all microblog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Validation (422) ───────────────────────────────────────────

class ValidationError(MicroblogError):
    """Input failed a shape or length rule."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )


class InvalidUsernameError(ValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("invalid username", "INVALID_USERNAME", context)


class InvalidEmailError(ValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("invalid email address", "INVALID_EMAIL", context)


class InvalidPasswordError(ValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("invalid password", "INVALID_PASSWORD", context)


class InvalidIDError(ValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("invalid id", "INVALID_ID", context)


class BioTooLongError(ValidationError):
    def __init__(self, limit: int = 140, context: ErrorContext | None = None):
        super().__init__(
            f"bio cannot be more than {limit} characters", "BIO_TOO_LONG", context,
        )
        self.limit = limit


class EmptyBodyError(ValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("post body cannot be empty", "EMPTY_BODY", context)


# ─── Not found (404) ────────────────────────────────────────────

class NotFoundError(MicroblogError):
    """Requested user or post does not exist."""
    def __init__(self, resource_type: str = "user", context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type


# ─── Conflict (409) ─────────────────────────────────────────────

class ConflictError(MicroblogError):
    """Operation collides with existing state."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class ExistingUsernameError(ConflictError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("username in use", "EXISTING_USERNAME", context)


class ExistingEmailError(ConflictError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("email in use", "EXISTING_EMAIL", context)


class AlreadyFollowingError(ConflictError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("already following user", "ALREADY_FOLLOWING", context)


class NotFollowingError(ConflictError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("not following user", "NOT_FOLLOWING", context)


# ─── Self-reference (403) ───────────────────────────────────────

class SelfReferenceError(MicroblogError):
    """Actor and target of a relationship are the same user."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.SELF_REFERENCE,
            ErrorSeverity.WARNING, context, 403,
        )


class CantFollowSelfError(SelfReferenceError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("can't follow yourself", "CANT_FOLLOW_SELF", context)


class CantUnfollowSelfError(SelfReferenceError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("can't unfollow yourself", "CANT_UNFOLLOW_SELF", context)


# ─── Authentication (401) ───────────────────────────────────────

class InvalidCredentialsError(MicroblogError):
    """Raised by the credential context only; the core never generates it."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "invalid username or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure (503) ───────────────────────────────────────

class DatabaseError(MicroblogError):
    """Persistence operation failed for infrastructure reasons."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
