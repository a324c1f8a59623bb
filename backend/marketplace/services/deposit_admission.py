"""Deposit Admission — admits a client deposit up to a share of their unpaid work.

Invariants:
    - The client's profile row is locked before the unpaid sum is read
    - limit = unpaid_sum * ratio over ALL the client's in_progress contracts
    - An unpaid sum of zero admits nothing
    - The credit goes through ledger_engine.credit_profile, never a direct write
"""

from decimal import Decimal

from marketplace.core.domain_types import DEFAULT_DEPOSIT_LIMIT_RATIO, ProfileId
from marketplace.core.errors import ErrorContext
from marketplace.core.ledger_rules import ensure_client
from marketplace.core.money import check_deposit_admissible, to_positive_money
from marketplace.core.repository_protocols import LedgerTransaction
from marketplace.schemas.ledger import DepositResult
from marketplace.services.ledger_engine import credit_profile


async def admit_deposit(
    tx: LedgerTransaction,
    client_id: ProfileId,
    amount: object,
    *,
    limit_ratio: Decimal = DEFAULT_DEPOSIT_LIMIT_RATIO,
) -> DepositResult:
    """Check the deposit ceiling and credit the client inside tx."""
    context = ErrorContext(operation="admit_deposit", profile_id=client_id)
    value = to_positive_money(amount, context)

    client = ensure_client(
        await tx.get_profile(client_id, for_update=True), client_id, context,
    )
    unpaid_sum = await tx.sum_unpaid_job_prices(client.id)
    limit = check_deposit_admissible(value, unpaid_sum, limit_ratio, context)

    new_balance = await credit_profile(tx, client.id, value, context)
    return DepositResult(
        client_id=client.id,
        amount=value,
        new_balance=new_balance,
        deposit_limit=limit,
    )
