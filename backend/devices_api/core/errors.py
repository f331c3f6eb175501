"""Error Hierarchy — typed, categorized exceptions for every device API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity and http_status
    - Severity picks the log level the API error handler uses
    - to_response() produces the REST envelope {"message": <category text>, "details": <specific>}
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - IntegrityViolation is NOT an API error: it is the store's signal, translated by the service

Design Decisions:
    - Single hierarchy with DevicesApiError base: one FastAPI handler catches all (ADR: uniform error shape)
    - Category text is fixed per error class; the specific text travels in `details`
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    LOCKED = "locked"
    DATABASE = "database"
    INTERNAL = "internal"


# Envelope `message` per category — clients match on these strings
CATEGORY_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.VALIDATION: "Validation failed",
    ErrorCategory.RESOURCE_NOT_FOUND: "Resource not found",
    ErrorCategory.CONFLICT: "Database constraint violation",
    ErrorCategory.LOCKED: "Resource is blocked",
    ErrorCategory.DATABASE: "Database error",
    ErrorCategory.INTERNAL: "Internal server error",
}


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    device_id: int | None = None


class DevicesApiError(Exception):
    """Base exception for all devices API errors."""

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
            "message": CATEGORY_MESSAGES[self.category],
            "details": self.message,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(DevicesApiError):
    """Request field failed validation (e.g. unknown state token)."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class ResourceNotFoundError(DevicesApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found with id: {resource_id}",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateDeviceError(DevicesApiError):
    """Write would break the (name, brand) uniqueness invariant."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Device with the same name and brand already exists",
            "DUPLICATE_DEVICE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class ResourceLockedError(DevicesApiError):
    """Write rejected because the device is IN_USE."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_LOCKED", ErrorCategory.LOCKED,
            ErrorSeverity.WARNING, context, 423,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DevicesApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Store Signals ──────────────────────────────────────────────

class IntegrityViolation(Exception):
    """Raised by a DeviceRepository when (name, brand) collides with another row."""
