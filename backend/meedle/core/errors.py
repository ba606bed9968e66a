"""Error Hierarchy — typed, categorized exceptions for all Meedle failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope consumed by the global handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MeedleError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - A denied login is a domain decision, not an error, inside core/; LoginService turns it
      into AccountBlockedError at the service boundary
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
    ACCESS_DENIED = "access_denied"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: str | None = None
    group_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class MeedleError(Exception):
    """Base exception for all Meedle errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "account_id": self.context.account_id,
                    "group_id": self.context.group_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidCredentialsError(MeedleError):
    """Unknown login or wrong password. Same message for both."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid login or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AccountBlockedError(MeedleError):
    """Account is blocked; message is the rendered block explanation."""
    def __init__(
        self,
        explanation: str,
        blocked_until: datetime | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            explanation, "ACCOUNT_BLOCKED", ErrorCategory.ACCESS_DENIED,
            ErrorSeverity.WARNING, context, 403,
        )
        self.blocked_until = blocked_until

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["blocked_until"] = (
            self.blocked_until.isoformat() if self.blocked_until else None
        )
        return response


class AccountNotConfirmedError(MeedleError):
    """Registered account still waiting for administrator confirmation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ACCOUNT_NOT_CONFIRMED", ErrorCategory.ACCESS_DENIED,
            ErrorSeverity.WARNING, context, 403,
        )


class InvalidBlockPeriodError(MeedleError):
    """Admin block request whose end is not in the future."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_BLOCK_PERIOD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class ResourceNotFoundError(MeedleError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(MeedleError):
    """Write rejected because it clashes with existing data."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MeedleError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
