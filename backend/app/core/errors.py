"""Error Taxonomy: one flat set of error kinds for every employee-status failure.

Invariants:
    - Every error carries an ErrorKind tag; category, severity and HTTP status
      are looked up from the kind, never chosen at the raise site
    - Client errors (400-level) are never retried; DATA_ACCESS_FAILURE is raised
      only after the retry budget is spent
    - CACHE_FAILURE is a logging code only: no EmpStatusError is ever raised with it
    - to_response() never includes tracebacks or driver messages

Design Decisions:
    - Single base with thin one-level subclasses: pytest.raises and the FastAPI
      handler both key off EmpStatusError, the subclasses only fill in the kind
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


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
    CACHE = "cache"


class ErrorKind(str, Enum):
    """Tag identifying what went wrong. The value doubles as the wire error code."""
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    INACTIVE = "INACTIVE"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    DATA_ACCESS_FAILURE = "DATA_ACCESS_FAILURE"
    CACHE_FAILURE = "CACHE_FAILURE"


# kind -> (category, severity, http_status)
_KIND_PROFILE: dict[ErrorKind, tuple[ErrorCategory, ErrorSeverity, int]] = {
    ErrorKind.INVALID_INPUT: (ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400),
    ErrorKind.NOT_FOUND: (ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, 404),
    ErrorKind.INACTIVE: (ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, 406),
    ErrorKind.INSUFFICIENT_DATA: (ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, 422),
    ErrorKind.DATA_ACCESS_FAILURE: (ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, 500),
    ErrorKind.CACHE_FAILURE: (ErrorCategory.CACHE, ErrorSeverity.INFO, 500),
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    national_key: str | None = None
    operation: str | None = None


class EmpStatusError(Exception):
    """Base exception for all employee-status errors."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.context = context or ErrorContext()
        self.category, self.severity, self.http_status = _KIND_PROFILE[kind]

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def is_client_error(self) -> bool:
        return self.http_status < 500

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
                    "national_key": self.context.national_key,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidInputError(EmpStatusError):
    """Malformed national key or malformed salary data."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(ErrorKind.INVALID_INPUT, message, context)


class EmployeeNotFoundError(EmpStatusError):
    """No employee stored under the national key."""
    def __init__(self, national_key: str, context: ErrorContext | None = None):
        super().__init__(
            ErrorKind.NOT_FOUND,
            f"User with NationalNumber '{national_key}' not found",
            context,
        )


class InactiveEmployeeError(EmpStatusError):
    """Employee exists but is deactivated."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(ErrorKind.INACTIVE, "User is not active", context)


class InsufficientDataError(EmpStatusError):
    """Fewer salary records than the minimum history."""
    def __init__(self, count: int, minimum: int, context: ErrorContext | None = None):
        super().__init__(
            ErrorKind.INSUFFICIENT_DATA,
            f"Insufficient salary data (minimum {minimum} records required, found {count})",
            context,
        )
        self.count = count


# ─── Server Errors (500-level) ──────────────────────────────────

class DataAccessError(EmpStatusError):
    """Record store still failing after every retry attempt."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            ErrorKind.DATA_ACCESS_FAILURE,
            f"Data access failed: {operation}",
            ctx,
        )
