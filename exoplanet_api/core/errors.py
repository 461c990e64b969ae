"""Error Hierarchy — typed, categorized exceptions for all analysis-service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ExoplanetApiError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ValidationError carries the full field -> message map, never only the first violation
    - Chart-data decode failures are NOT errors here: they degrade to None inside core/chart_data.py
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
    INVALID_QUERY = "invalid_query"
    SERIALIZATION = "serialization"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    analysis_id: int | None = None


class ExoplanetApiError(Exception):
    """Base exception for all analysis-service errors."""

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

    def details(self) -> dict:
        """Error-specific payload merged into the response envelope."""
        return {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        body.update(self.details())
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(ExoplanetApiError):
    """Analysis input violates one or more field constraints."""
    def __init__(
        self, errors: dict[str, str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Validation failed for {len(errors)} field(s): "
            f"{', '.join(sorted(errors))}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.errors = dict(errors)

    def details(self) -> dict:
        return {"errors": self.errors}


class NotFoundError(ExoplanetApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.analysis_id = resource_id
        super().__init__(
            f"{resource_type} not found with id: {resource_id}",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id

    def details(self) -> dict:
        return {"resource_id": self.resource_id}


class InvalidQueryError(ExoplanetApiError):
    """Filter, sort or page parameters are malformed."""
    def __init__(
        self, message: str, parameter: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_QUERY", ErrorCategory.INVALID_QUERY,
            ErrorSeverity.ERROR, context, 400,
        )
        self.parameter = parameter

    def details(self) -> dict:
        return {"parameter": self.parameter}


class SerializationError(ExoplanetApiError):
    """Chart-data document cannot be encoded for storage."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to process chart data: {message}",
            "CHART_DATA_SERIALIZATION_ERROR", ErrorCategory.SERIALIZATION,
            ErrorSeverity.ERROR, context, 422,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ExoplanetApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
