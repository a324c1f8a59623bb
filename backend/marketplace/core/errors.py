"""Ledger Errors — one tagged exception type for every ledger failure mode.

Invariants:
    - Every error has a kind (ErrorKind), severity (ErrorSeverity) and context
    - Business kinds are terminal for the operation; nothing is retried here
    - DATABASE is the only infrastructure kind (mapped from SQLAlchemy errors)
      and the only CRITICAL one; business kinds are WARNING
    - to_response() produces the structured envelope; no internal details leak

Design Decisions:
    - Single LedgerError with a kind field instead of a class per failure:
      callers match on `err.kind`, not on isinstance chains
    - ErrorContext as dataclass: ids for observability without coupling to logging
    - http_status is a hint for an outer transport layer, looked up from the kind
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """Every way a ledger operation can fail."""
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    DEPOSIT_LIMIT_EXCEEDED = "deposit_limit_exceeded"
    ALREADY_PAID = "already_paid"
    DATABASE = "database"


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INSUFFICIENT_FUNDS: 400,
    ErrorKind.DEPOSIT_LIMIT_EXCEEDED: 406,
    ErrorKind.ALREADY_PAID: 409,
    ErrorKind.DATABASE: 503,
}


@dataclass
class ErrorContext:
    """Ids describing where the failure happened."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    profile_id: int | None = None
    contract_id: int | None = None
    job_id: int | None = None


class LedgerError(Exception):
    """Raised by every ledger operation; aborts the enclosing transaction."""

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

    @classmethod
    def not_found(
        cls, resource_type: str, resource_id: object,
        context: ErrorContext | None = None,
    ) -> "LedgerError":
        return cls(
            ErrorKind.NOT_FOUND,
            f"{resource_type} '{resource_id}' not found",
            context,
        )

    @property
    def code(self) -> str:
        return self.kind.name

    @property
    def severity(self) -> ErrorSeverity:
        if self.kind is ErrorKind.DATABASE:
            return ErrorSeverity.CRITICAL
        return ErrorSeverity.WARNING

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self.kind]

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "kind": self.kind.value,
                "message": self.message,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "profile_id": self.context.profile_id,
                    "contract_id": self.context.contract_id,
                    "job_id": self.context.job_id,
                },
            }
        }

    def __repr__(self) -> str:
        return f"LedgerError({self.kind.name}, {self.message!r})"
