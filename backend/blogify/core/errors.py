"""Error Hierarchy — typed, categorized exceptions for every Blogify failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Identity/authorization/domain errors are 400-level; dependency errors are 503
    - to_response() produces the REST envelope; no credential material ever lands in it
    - InvalidCredentialsError carries one fixed message for every failure path

Design Decisions:
    - Single hierarchy with BlogifyError base: FastAPI global handler catches all
      and callers match on the concrete class, never on ad hoc fields
    - ErrorContext as dataclass: observability data kept apart from the message
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UPLOAD = "upload"
    DEPENDENCY = "dependency"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    redirect_to: str | None = None
    debug_info: dict[str, Any] | None = None


class BlogifyError(Exception):
    """Base exception for all Blogify errors."""

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
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                    "redirect_to": self.context.redirect_to,
                },
            }
        }


# ─── Identity Errors ─────────────────────────────────────────────

class DuplicateIdentityError(BlogifyError):
    """Signup attempted with an email that is already registered."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An account with this email already exists",
            "DUPLICATE_IDENTITY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class InvalidCredentialsError(BlogifyError):
    """Signin failed. Unknown email and wrong password are indistinguishable."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Incorrect email or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class TokenInvalidError(BlogifyError):
    """Session token failed signature, expiry or structure checks."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Session token rejected: {reason}",
            "TOKEN_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.INFO, context, 401,
        )
        self.reason = reason


class UnauthenticatedError(BlogifyError):
    """Anonymous actor attempted an action that requires identity."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.redirect_to = ctx.redirect_to or "/api/v1/users/signin"
        super().__init__(
            "Sign in required",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 401,
        )


class ForbiddenError(BlogifyError):
    """Authenticated actor does not own the target resource."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"Not authorized to modify this {resource_type.lower()}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(BlogifyError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class FieldValidationError(BlogifyError):
    """Missing required field or value outside the allowed set."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UploadRejectedError(BlogifyError):
    """Media upload refused by policy or by the media host."""
    def __init__(self, message: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UPLOAD_REJECTED", ErrorCategory.UPLOAD,
            ErrorSeverity.ERROR, context, 400,
        )
        self.reason = reason


# ─── Infrastructure Errors (503) ────────────────────────────────

class DependencyUnavailableError(BlogifyError):
    """A backing service (store, media host) could not be reached."""
    def __init__(
        self,
        message: str,
        dependency: str,
        context: ErrorContext | None = None,
        code: str = "DEPENDENCY_UNAVAILABLE",
        category: ErrorCategory = ErrorCategory.DEPENDENCY,
    ):
        super().__init__(
            message, code, category,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.dependency = dependency


class DatabaseError(DependencyUnavailableError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}", "database", context,
            code="DATABASE_ERROR", category=ErrorCategory.DATABASE,
        )
        self.operation = operation
