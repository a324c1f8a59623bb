"""Ledger Rules — tests for transfer arithmetic and job payability.

Tests cover:
    - compute_transfer conserves money and allows draining to zero
    - compute_transfer raises INSUFFICIENT_FUNDS one cent short
    - check_distinct_parties rejects self-transfers
    - ensure_client rejects missing profiles and contractors as NOT_FOUND
    - ensure_payable: paid -> ALREADY_PAID, non in_progress -> VALIDATION
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from marketplace.core.domain_types import ContractStatus, JobState, ProfileRole
from marketplace.core.errors import ErrorKind, LedgerError
from marketplace.core.ledger_rules import (
    check_distinct_parties,
    compute_credit,
    compute_transfer,
    ensure_client,
    ensure_payable,
)
from marketplace.core.records import ContractRecord, JobRecord, ProfileRecord


def _profile(pid, balance, role=ProfileRole.CLIENT):
    return ProfileRecord(
        id=pid, first_name="A", last_name="B", profession="C",
        balance=Decimal(balance), role=role,
    )


def _job(paid=False):
    return JobRecord(
        id=3, contract_id=1, description="work", price=Decimal("300.00"),
        paid=paid,
        payment_date=datetime(2020, 8, 15, tzinfo=timezone.utc) if paid else None,
    )


def _contract(status=ContractStatus.IN_PROGRESS):
    return ContractRecord(
        id=1, terms="t", client_id=1, contractor_id=5, status=status,
    )


# ─── transfers ───────────────────────────────────────────────────

def test_compute_transfer_conserves_money():
    source = _profile(1, "1150.00")
    target = _profile(5, "150.00", ProfileRole.CONTRACTOR)
    new_source, new_target = compute_transfer(source, target, Decimal("300.00"))
    assert new_source == Decimal("850.00")
    assert new_target == Decimal("450.00")
    assert source.balance - new_source == new_target - target.balance


def test_compute_transfer_can_drain_to_zero():
    new_source, _ = compute_transfer(
        _profile(1, "100.00"), _profile(5, "0.00"), Decimal("100.00"),
    )
    assert new_source == Decimal("0.00")


def test_compute_transfer_one_cent_short_fails():
    with pytest.raises(LedgerError) as exc:
        compute_transfer(
            _profile(1, "99.99"), _profile(5, "0.00"), Decimal("100.00"),
        )
    assert exc.value.kind is ErrorKind.INSUFFICIENT_FUNDS


def test_check_distinct_parties_rejects_same_id():
    with pytest.raises(LedgerError) as exc:
        check_distinct_parties(1, 1)
    assert exc.value.kind is ErrorKind.VALIDATION


def test_compute_credit_adds_amount():
    assert compute_credit(_profile(1, "10.00"), Decimal("2.50")) == Decimal("12.50")


# ─── deposit target ──────────────────────────────────────────────

def test_ensure_client_returns_client_profile():
    profile = _profile(1, "0")
    assert ensure_client(profile, 1) is profile


def test_ensure_client_missing_profile_is_not_found():
    with pytest.raises(LedgerError) as exc:
        ensure_client(None, 12)
    assert exc.value.kind is ErrorKind.NOT_FOUND
    assert "'12'" in exc.value.message


def test_ensure_client_contractor_is_not_found():
    with pytest.raises(LedgerError) as exc:
        ensure_client(_profile(5, "0", ProfileRole.CONTRACTOR), 5)
    assert exc.value.kind is ErrorKind.NOT_FOUND


# ─── payability ──────────────────────────────────────────────────

def test_unpaid_job_under_in_progress_contract_is_payable():
    ensure_payable(_job(), _contract())


def test_paid_job_is_not_payable():
    with pytest.raises(LedgerError) as exc:
        ensure_payable(_job(paid=True), _contract())
    assert exc.value.kind is ErrorKind.ALREADY_PAID


@pytest.mark.parametrize("status", [ContractStatus.NEW, ContractStatus.TERMINATED])
def test_job_outside_in_progress_contract_is_not_payable(status):
    with pytest.raises(LedgerError) as exc:
        ensure_payable(_job(), _contract(status))
    assert exc.value.kind is ErrorKind.VALIDATION
    assert status.value in exc.value.message


def test_job_state_follows_paid_flag():
    assert _job().state is JobState.UNPAID
    assert _job(paid=True).state is JobState.PAID
