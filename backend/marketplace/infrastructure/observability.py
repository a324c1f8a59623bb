"""Structured Logging — JSON formatter and setup for ledger observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Ledger ids (operation, profile_id, contract_id, job_id) and error_kind
      surfaced when present; never balances or amounts
    - A LedgerError in exc_info fills error_kind, severity and any ids the
      call site did not pass in extra
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - timestamp from record.created: the moment of the call, not of formatting
    - setup_logging called once by build_ledger_service
"""

import logging
import json
from datetime import datetime, timezone

from marketplace.core.errors import LedgerError

CONTEXT_FIELDS = ("operation", "profile_id", "contract_id", "job_id")
EXTRA_FIELDS = CONTEXT_FIELDS + ("error_kind",)


def _ledger_error(record: logging.LogRecord) -> LedgerError | None:
    if record.exc_info and isinstance(record.exc_info[1], LedgerError):
        return record.exc_info[1]
    return None


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val

        err = _ledger_error(record)
        if err is not None:
            log.setdefault("error_kind", err.kind.value)
            log["severity"] = err.severity.value
            for key in CONTEXT_FIELDS:
                val = getattr(err.context, key)
                if val is not None:
                    log.setdefault(key, val)

        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
