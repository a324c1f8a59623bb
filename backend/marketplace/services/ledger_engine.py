"""Ledger Engine — the only code path that writes Profile.balance.

Invariants:
    - transfer_funds conserves money: source loses exactly what target gains
    - Both profile rows are locked in ascending id order before any decision
    - No write happens before every check has passed
    - Runs inside the caller's transaction; never commits or rolls back itself

Design Decisions:
    - Ascending lock order: two transfers touching the same pair of profiles
      always queue on the same first row and cannot deadlock
    - credit_profile is the external-origin half of a transfer (deposits)
"""

from decimal import Decimal

from marketplace.core.domain_types import ProfileId
from marketplace.core.errors import ErrorContext, LedgerError
from marketplace.core.ledger_rules import (
    check_distinct_parties, compute_credit, compute_transfer,
)
from marketplace.core.money import to_positive_money
from marketplace.core.records import ProfileRecord
from marketplace.core.repository_protocols import LedgerTransaction
from marketplace.schemas.ledger import TransferResult


async def _lock_profile(
    tx: LedgerTransaction, profile_id: ProfileId, context: ErrorContext,
) -> ProfileRecord:
    profile = await tx.get_profile(profile_id, for_update=True)
    if profile is None:
        raise LedgerError.not_found("Profile", profile_id, context)
    return profile


async def transfer_funds(
    tx: LedgerTransaction,
    from_profile_id: ProfileId,
    to_profile_id: ProfileId,
    amount: object,
) -> TransferResult:
    """Move amount from one profile to another inside tx."""
    context = ErrorContext(operation="transfer_funds", profile_id=from_profile_id)
    check_distinct_parties(from_profile_id, to_profile_id, context)
    value = to_positive_money(amount, context)

    locked = {}
    for profile_id in sorted((from_profile_id, to_profile_id)):
        locked[profile_id] = await _lock_profile(tx, profile_id, context)
    source, target = locked[from_profile_id], locked[to_profile_id]

    new_source_balance, new_target_balance = compute_transfer(
        source, target, value, context,
    )
    await tx.update_profile_balance(source.id, new_source_balance)
    await tx.update_profile_balance(target.id, new_target_balance)

    return TransferResult(
        from_profile_id=source.id,
        to_profile_id=target.id,
        amount=value,
        from_balance=new_source_balance,
        to_balance=new_target_balance,
    )


async def credit_profile(
    tx: LedgerTransaction,
    profile_id: ProfileId,
    amount: object,
    context: ErrorContext | None = None,
) -> Decimal:
    """Add externally originated funds to one profile. Returns the new balance."""
    context = context or ErrorContext(operation="credit_profile", profile_id=profile_id)
    value = to_positive_money(amount, context)
    profile = await _lock_profile(tx, profile_id, context)
    new_balance = compute_credit(profile, value)
    await tx.update_profile_balance(profile.id, new_balance)
    return new_balance
