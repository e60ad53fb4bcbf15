"""Error Hierarchy — typed, categorized exceptions for all SimpleBlog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404/422) are recoverable; infrastructure errors (500) are critical
    - to_response() produces the REST envelope {statusCode, message[, errors]}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BlogError base: FastAPI domain handler catches all
      (ADR: uniform error shape)
    - Not-found and validation outcomes are raised from dependencies and turned
      into responses by the domain handler, never by the catch-all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    CLIENT_INPUT = "client_input"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PATCH = "patch"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    resource_id: int | str | None = None
    debug_info: dict[str, Any] | None = None


class BlogError(Exception):
    """Base exception for all SimpleBlog errors."""

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
        return {"statusCode": self.http_status, "message": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ClientInputError(BlogError):
    """Required payload or parameter is missing or unusable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CLIENT_INPUT_ERROR", ErrorCategory.CLIENT_INPUT,
            ErrorSeverity.WARNING, context, 400,
        )


class EntityValidationError(BlogError):
    """Field-level validation failed on a manipulation or patched DTO."""
    def __init__(
        self, resource: str, errors: dict[str, str],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = ctx.resource or resource
        super().__init__(
            f"Invalid model state for the {resource} object",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 422,
        )
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["errors"] = self.errors
        return response


class ResourceNotFoundError(BlogError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} with id: {resource_id} doesn't exist in the database.",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class CollectionNotFoundError(BlogError):
    """At least one requested id of a collection does not exist."""
    def __init__(
        self, resource_type: str, missing_ids: list[int],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = resource_type
        ctx.debug_info = {"missing_ids": missing_ids}
        super().__init__(
            "Some ids are not valid in a collection",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.missing_ids = missing_ids


class PatchApplicationError(BlogError):
    """Patch document is malformed or cannot be applied to the target shape."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PATCH_ERROR", ErrorCategory.PATCH,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BlogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {"statusCode": self.http_status, "message": "Internal Server Error."}
