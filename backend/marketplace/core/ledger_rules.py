"""Ledger Rules — pure balance arithmetic and job payability checks.

Invariants:
    - compute_transfer conserves money: debit == credit == amount
    - No computed balance is ever negative
    - A job is payable only while unpaid and under an in_progress contract

Design Decisions:
    - Transfer checks run ids, then amount, then funds; first error wins
    - Role mismatch on a deposit target reads as NOT_FOUND (no client by that id)
"""

from decimal import Decimal

from marketplace.core.domain_types import ContractStatus, ProfileRole
from marketplace.core.errors import ErrorContext, ErrorKind, LedgerError
from marketplace.core.records import ContractRecord, JobRecord, ProfileRecord


def check_distinct_parties(
    from_profile_id: int, to_profile_id: int, context: ErrorContext | None = None,
) -> None:
    if from_profile_id == to_profile_id:
        raise LedgerError(
            ErrorKind.VALIDATION,
            "Cannot transfer funds from a profile to itself",
            context,
        )


def compute_transfer(
    source: ProfileRecord,
    target: ProfileRecord,
    amount: Decimal,
    context: ErrorContext | None = None,
) -> tuple[Decimal, Decimal]:
    """Return (new_source_balance, new_target_balance) for moving amount."""
    if source.balance < amount:
        raise LedgerError(
            ErrorKind.INSUFFICIENT_FUNDS,
            f"Insufficient funds in profile {source.id}",
            context,
        )
    return source.balance - amount, target.balance + amount


def compute_credit(profile: ProfileRecord, amount: Decimal) -> Decimal:
    return profile.balance + amount


def ensure_client(
    profile: ProfileRecord | None,
    profile_id: int,
    context: ErrorContext | None = None,
) -> ProfileRecord:
    """A deposit target must exist and be a client; anything else is NOT_FOUND."""
    if profile is None or profile.role is not ProfileRole.CLIENT:
        raise LedgerError.not_found("Client", profile_id, context)
    return profile


def ensure_payable(
    job: JobRecord,
    contract: ContractRecord,
    context: ErrorContext | None = None,
) -> None:
    if job.paid:
        raise LedgerError(
            ErrorKind.ALREADY_PAID, f"Job {job.id} is already paid", context,
        )
    if contract.status is not ContractStatus.IN_PROGRESS:
        raise LedgerError(
            ErrorKind.VALIDATION,
            f"Job {job.id} belongs to contract {contract.id} "
            f"which is {contract.status.value}, not in_progress",
            context,
        )
