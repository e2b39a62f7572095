"""Error Hierarchy - typed, categorized exceptions for every ledger query failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ValidationError is raised before any store access (400)
    - NotFoundError renders the fixed {"error": "Not Found"} body for every resource kind;
      the resource kind (token | supply) is kept for logs only
    - StoreError is never retried here; the open snapshot is rolled back before it escapes

Design Decisions:
    - Single hierarchy with LedgerApiError base: one FastAPI handler renders all of them
    - ErrorContext as dataclass: request-scoped detail for logs without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ticker: str | None = None
    address: str | None = None


class LedgerApiError(Exception):
    """Base exception for all ledger query errors."""

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


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(LedgerApiError):
    """Malformed or out-of-range query input (ticker, address, limit, offset)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [
            {"field": self.field, "message": self.message},
        ]
        return response


class NotFoundError(LedgerApiError):
    """Requested ledger resource does not exist at the observed snapshot."""

    NOT_FOUND_BODY = {"error": "Not Found"}

    def __init__(
        self, resource: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.resource = resource
        self.resource_id = resource_id

    def to_response(self) -> dict:
        return dict(self.NOT_FOUND_BODY)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(LedgerApiError):
    """Ledger store operation failed (I/O, transaction abort, timeout)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Ledger store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
