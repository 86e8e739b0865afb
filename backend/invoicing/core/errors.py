"""Error Hierarchy — typed, categorized exceptions for all invoicing failure modes.

Invariants:
    - Every service error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation and domain failures are 400-level; a missing invoice is 404;
      infrastructure errors are 500-level
    - to_response() produces the REST envelope
    - DomainError (raised by the aggregate) carries no HTTP knowledge; handlers
      convert it to DomainRuleViolationError at the operation boundary

Design Decisions:
    - Single hierarchy with InvoicingError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone
from uuid import UUID


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    invoice_id: str | None = None
    line_id: str | None = None
    field_errors: dict[str, list[str]] | None = None
    debug_info: dict[str, Any] | None = None


# ─── Aggregate Errors (framework-free) ──────────────────────────

class DomainError(Exception):
    """An invoice aggregate invariant was violated."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvoiceLineNotFoundError(DomainError):
    """The referenced line is not part of the invoice."""

    def __init__(self, line_id: UUID) -> None:
        super().__init__(f"Invoice line with ID '{line_id}' not found.")
        self.line_id = line_id


class LastInvoiceLineError(DomainError):
    """Removing the line would leave the invoice without lines."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot remove the last invoice line. "
            "Invoice must have at least one line."
        )


# ─── Service Errors ─────────────────────────────────────────────

class InvoicingError(Exception):
    """Base exception for all errors surfaced through the API."""

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
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "invoice_id": self.context.invoice_id,
                "line_id": self.context.line_id,
            },
        }
        if self.context.field_errors:
            body["details"] = [
                {"field": name, "message": message}
                for name, messages in self.context.field_errors.items()
                for message in messages
            ]
        return {"error": body}


# ─── Request Errors (400/404) ───────────────────────────────────

class ValidationFailedError(InvoicingError):
    """Caller-side rule set rejected the request."""
    def __init__(
        self, field_errors: dict[str, list[str]], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_errors = field_errors
        super().__init__(
            "One or more validation errors occurred.",
            "validation_failed", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field_errors = field_errors


class DomainRuleViolationError(InvoicingError):
    """Aggregate rejected an operation; message is the DomainError's, verbatim."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "domain_validation_error", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvoiceNotFoundError(InvoicingError):
    """Requested invoice does not exist."""
    def __init__(self, invoice_id: UUID, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.invoice_id = str(invoice_id)
        super().__init__(
            f"Invoice '{invoice_id}' was not found.",
            "invoice_not_found", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.invoice_id = invoice_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(InvoicingError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
