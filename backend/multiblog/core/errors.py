"""Error Hierarchy — every failure the API can report, with its HTTP status.

Invariants:
    - Each error carries code, category and severity, plus the status it maps to
    - 4xx errors describe a bad request; the 503 DatabaseError is the only
      infrastructure error raised on purpose
    - to_response() is the single source of the JSON error envelope
    - Ownership failures reuse ResourceNotFoundError: "absent" and "not yours"
      produce byte-identical responses

Design Decisions:
    - One MultiblogError base, so api/error_handlers.py registers one handler
    - ErrorContext is a plain dataclass: services fill it, handlers read it,
      neither imports logging config
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Coarse grouping exposed to clients as error.category."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the error happened; resource_type and field are sent to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_type: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class MultiblogError(Exception):
    """Base for all errors the API turns into a JSON envelope."""

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
        self.context = context if context is not None else ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        ctx = self.context
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": ctx.timestamp.isoformat(),
                "context": {
                    "resource_type": ctx.resource_type,
                    "field": ctx.field,
                },
            }
        }


# ─── Client errors (4xx) ─────────────────────────────────────────

class InvalidSlugError(MultiblogError):
    """Slug source normalizes to nothing (e.g. a title made of punctuation)."""
    def __init__(self, source: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = "slug"
        super().__init__(
            f"Cannot derive a URL slug from '{source}'",
            "INVALID_SLUG", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.source = source


class AuthenticationError(MultiblogError):
    """Credentials or bearer token rejected."""
    def __init__(
        self, message: str = "Not authenticated", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(MultiblogError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class SlugConflictError(MultiblogError):
    """Slug already taken within its scope (a project for posts, global for projects)."""
    def __init__(self, resource_type: str, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.field = "slug"
        super().__init__(
            f"A {resource_type.lower()} with slug '{slug}' already exists",
            "SLUG_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.slug = slug


class DuplicateAccountError(MultiblogError):
    """Registration collides with an existing username or email."""
    def __init__(self, field_name: str, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field_name
        super().__init__(
            message, "DUPLICATE_ACCOUNT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.field = field_name


# ─── Storage errors (503) ────────────────────────────────────────

class DatabaseError(MultiblogError):
    """Storage unreachable or a query failed outside the domain checks."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} error: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
