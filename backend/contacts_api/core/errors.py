"""Error Hierarchy — numeric error codes and typed exceptions for every failure mode.

Invariants:
    - ErrorCode values are part of the wire contract and are never renumbered
    - Every ApiError carries an ErrorCode, a client-safe message and a severity
    - Internal detail (driver text, traces) lives in `detail`, never in `message`
    - Validation and not-found failures are expected outcomes (INFO severity);
      persistence failures are CRITICAL

Design Decisions:
    - Single hierarchy with ApiError base: the global handler catches all
    - ErrorContext as dataclass: structured log context without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Outcome classifier carried in every envelope. 0 means success."""
    SUCCESS = 0
    VALIDATION_ERROR = 1
    NOT_FOUND = 2
    DATABASE_ERROR = 3
    NETWORK_ERROR = -1


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    resource_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ApiError(Exception):
    """Base exception for all contacts API errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        detail: str | None = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.severity = severity
        self.context = context or ErrorContext()
        self.detail = detail
        self.payload = payload

    def log_extra(self) -> dict[str, Any]:
        """Structured logging fields for this error."""
        return {
            "error_code": self.code.name,
            "resource": self.context.resource,
            "resource_id": self.context.resource_id,
            "operation": self.context.operation,
        }


# ─── Client-correctable (400-level) ──────────────────────────────

class ValidationFailure(ApiError):
    """Inbound payload failed field-level validation."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        row: int | None = None,
        context: ErrorContext | None = None,
    ):
        payload = None
        if row is not None:
            payload = {"row": row, "field": field}
        super().__init__(
            message, ErrorCode.VALIDATION_ERROR, ErrorSeverity.INFO,
            context, payload=payload,
        )
        self.field = field
        self.row = row

    def for_row(self, row: int) -> "ValidationFailure":
        """Same failure, located at `row` of a multi-row payload."""
        return ValidationFailure(
            f"items[{row}]: {self.message}", self.field, row, self.context,
        )


class NotFoundError(ApiError):
    """Requested record does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} {resource_id} not found",
            ErrorCode.NOT_FOUND, ErrorSeverity.INFO, ctx,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Server-side (500-level) ─────────────────────────────────────

class PersistenceFailure(ApiError):
    """Store unavailable or query rejected."""
    def __init__(
        self,
        reason: str,
        operation: str,
        detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            "Database error", ErrorCode.DATABASE_ERROR,
            ErrorSeverity.CRITICAL, ctx, detail=detail,
        )
        self.reason = reason
        self.operation = operation


class TransportFailure(ApiError):
    """Upstream connectivity problem. Reserved; the core never raises it."""
    def __init__(self, detail: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            "Service unavailable", ErrorCode.NETWORK_ERROR,
            ErrorSeverity.CRITICAL, context, detail=detail,
        )
