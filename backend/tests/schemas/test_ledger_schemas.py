"""Ledger Schemas — verifies views built from core records and JSON output.

Tests:
    - ContractView / JobView validate from frozen records
    - Decimal amounts serialize as strings in JSON mode
"""

from datetime import datetime, timezone
from decimal import Decimal

from marketplace.core.domain_types import ContractStatus
from marketplace.core.records import ContractRecord, JobRecord
from marketplace.schemas.ledger import (
    ContractView, DepositResult, JobView, PaymentResult,
)


def test_contract_view_from_record():
    record = ContractRecord(
        id=1, terms="t", client_id=1, contractor_id=5,
        status=ContractStatus.IN_PROGRESS,
    )
    view = ContractView.model_validate(record)
    assert view.status is ContractStatus.IN_PROGRESS
    assert view.model_dump(mode="json")["status"] == "in_progress"


def test_payment_result_json():
    job = JobRecord(
        id=3, contract_id=1, description="work", price=Decimal("300.00"),
        paid=True, payment_date=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )
    result = PaymentResult(
        job=JobView.model_validate(job),
        client_balance=Decimal("850.00"),
        contractor_balance=Decimal("450.00"),
    )
    data = result.model_dump(mode="json")
    assert data["client_balance"] == "850.00"
    assert data["job"]["price"] == "300.00"
    assert data["job"]["paid"] is True
    assert data["job"]["payment_date"].startswith("2024-03-01T00:00:00")


def test_unpaid_job_view_has_no_payment_date():
    job = JobRecord(
        id=2, contract_id=1, description="w", price=Decimal("110.00"),
        paid=False, payment_date=None,
    )
    assert JobView.model_validate(job).payment_date is None


def test_deposit_result_fields():
    result = DepositResult(
        client_id=1, amount=Decimal("102.50"),
        new_balance=Decimal("1252.50"), deposit_limit=Decimal("102.50"),
    )
    assert result.model_dump()["deposit_limit"] == Decimal("102.50")
