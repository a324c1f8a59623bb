"""Ledger Errors — tests for the tagged error type and its envelope.

Tests cover:
    - kind drives code, severity and http_status
    - not_found builds a resource message
    - to_response carries kind, message and context ids
"""

from marketplace.core.errors import (
    ErrorContext,
    ErrorKind,
    ErrorSeverity,
    LedgerError,
)


def test_code_is_kind_name():
    err = LedgerError(ErrorKind.ALREADY_PAID, "Job 3 is already paid")
    assert err.code == "ALREADY_PAID"
    assert str(err) == "Job 3 is already paid"


def test_business_kinds_are_warnings_database_is_critical():
    assert LedgerError(ErrorKind.VALIDATION, "x").severity is ErrorSeverity.WARNING
    assert LedgerError(ErrorKind.DATABASE, "x").severity is ErrorSeverity.CRITICAL


def test_every_kind_has_http_status():
    statuses = {kind: LedgerError(kind, "x").http_status for kind in ErrorKind}
    assert statuses[ErrorKind.NOT_FOUND] == 404
    assert statuses[ErrorKind.UNAUTHORIZED] == 401
    assert statuses[ErrorKind.INSUFFICIENT_FUNDS] == 400
    assert statuses[ErrorKind.DEPOSIT_LIMIT_EXCEEDED] == 406
    assert statuses[ErrorKind.ALREADY_PAID] == 409
    assert statuses[ErrorKind.DATABASE] == 503


def test_not_found_message_names_resource():
    err = LedgerError.not_found("Job", 42)
    assert err.kind is ErrorKind.NOT_FOUND
    assert err.message == "Job '42' not found"


def test_to_response_envelope():
    context = ErrorContext(operation="pay_job", profile_id=1, job_id=3)
    err = LedgerError(ErrorKind.INSUFFICIENT_FUNDS, "Insufficient funds", context)
    body = err.to_response()["error"]
    assert body["code"] == "INSUFFICIENT_FUNDS"
    assert body["kind"] == "insufficient_funds"
    assert body["message"] == "Insufficient funds"
    assert body["severity"] == "warning"
    assert body["context"] == {
        "operation": "pay_job",
        "profile_id": 1,
        "contract_id": None,
        "job_id": 3,
    }
    assert body["timestamp"] == context.timestamp.isoformat()


def test_default_context_is_created():
    err = LedgerError(ErrorKind.VALIDATION, "bad")
    assert err.context.operation is None
    assert err.context.timestamp is not None


def test_only_database_is_critical():
    critical = {
        kind for kind in ErrorKind
        if LedgerError(kind, "x").severity is ErrorSeverity.CRITICAL
    }
    assert critical == {ErrorKind.DATABASE}
