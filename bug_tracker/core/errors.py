"""Error Hierarchy — typed, categorized exceptions for every bug-tracker failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by resubmitting; storage errors are critical
    - to_response() produces the {success: false, message, code} REST envelope
    - Every failure reaching the API boundary is exactly one of the four kinds below

Design Decisions:
    - Single hierarchy with BugTrackerError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Sequence


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INVALID_IDENTIFIER = "invalid_identifier"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_id: str | None = None
    operation: str | None = None


class BugTrackerError(Exception):
    """Base exception for all bug-tracker errors."""

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
        """Convert to standardized REST error envelope."""
        return {"success": False, "message": self.message, "code": self.code}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(BugTrackerError):
    """One or more field rules failed."""
    def __init__(self, violations: Sequence, context: ErrorContext | None = None):
        super().__init__(
            "Validation failed", "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.violations = list(violations)

    def to_response(self) -> dict:
        response = super().to_response()
        response["errors"] = [v.to_dict() for v in self.violations]
        return response


class NotFoundError(BugTrackerError):
    """Requested record does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidIdentifierError(BugTrackerError):
    """Identifier is not in the format the storage collaborator expects."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"Invalid {resource_type.lower()} ID format",
            "INVALID_IDENTIFIER", ErrorCategory.INVALID_IDENTIFIER,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageFailureError(BugTrackerError):
    """The storage collaborator itself failed. Not retried."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "STORAGE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
