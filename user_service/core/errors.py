"""Error Hierarchy — typed exceptions for the ways a users request can fail.

Invariants:
    - Every error carries code, category, severity and the HTTP status it maps to
    - ResourceNotFoundError renders the flat {"message": ...} body clients rely on;
      every other error renders the {"error": {...}} envelope
    - Messages are safe to show clients; driver details stay in logs

Design Decisions:
    - ConstraintViolationError subclasses DatabaseError and shares its code and
      status: duplicate keys are reported as a database failure, not a 409
"""

from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class UserServiceError(Exception):
    """Base exception; the global handler turns it into a response."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.raised_at = datetime.now(timezone.utc)

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.raised_at.isoformat(),
            }
        }


class ResourceNotFoundError(UserServiceError):
    """No row for the requested key."""

    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    severity = ErrorSeverity.WARNING
    http_status = 404

    def __init__(self, resource_type: str, resource_id: str | None = None):
        super().__init__(f"{resource_type} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id

    def to_response(self) -> dict:
        return {"message": self.message}


class DatabaseError(UserServiceError):
    """Statement or connection failure reported by SQLAlchemy."""

    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.operation = operation


class ConstraintViolationError(DatabaseError):
    """A uniqueness or integrity constraint rejected the write."""

    def __init__(self, message: str = "Integrity constraint violated"):
        super().__init__(message, "commit")
