"""Money — Decimal coercion and the deposit ceiling rule.

Invariants:
    - Every amount leaving this module is a Decimal with exactly two places
    - Inputs with more than two places are rejected, never rounded
    - Amounts beyond MAX_MONEY (the NUMERIC(12, 2) column bound) are rejected
    - deposit_limit(0) == 0, so no positive deposit fits an empty ceiling

Design Decisions:
    - Floats go through str() before Decimal: 102.6 stays 102.6, not 102.59999...
    - ROUND_HALF_UP for the ceiling: 25% of an odd cent count rounds like a till
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from marketplace.core.domain_types import MAX_MONEY, MONEY_QUANTUM
from marketplace.core.errors import ErrorContext, ErrorKind, LedgerError


def to_money(value: object, context: ErrorContext | None = None) -> Decimal:
    """Coerce value to a two-place Decimal or raise VALIDATION."""
    if isinstance(value, bool):
        raise LedgerError(ErrorKind.VALIDATION, "Amount must be a number", context)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise LedgerError(
            ErrorKind.VALIDATION, f"Amount '{value}' is not a number", context,
        )
    if not amount.is_finite():
        raise LedgerError(ErrorKind.VALIDATION, "Amount must be finite", context)
    if abs(amount) > MAX_MONEY:
        raise LedgerError(
            ErrorKind.VALIDATION, f"Amount '{value}' exceeds {MAX_MONEY}", context,
        )
    # bounded above, so quantize stays within the 28-digit context
    quantized = amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    if quantized != amount:
        raise LedgerError(
            ErrorKind.VALIDATION,
            f"Amount '{value}' has more than two decimal places",
            context,
        )
    return quantized


def to_positive_money(value: object, context: ErrorContext | None = None) -> Decimal:
    """Coerce value to money and require it to be strictly positive."""
    amount = to_money(value, context)
    if amount <= 0:
        raise LedgerError(
            ErrorKind.VALIDATION, "Amount must be greater than zero", context,
        )
    return amount


def deposit_limit(unpaid_sum: Decimal, ratio: Decimal) -> Decimal:
    """Deposit ceiling: ratio of the client's outstanding unpaid work."""
    return (unpaid_sum * ratio).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def check_deposit_admissible(
    amount: Decimal,
    unpaid_sum: Decimal,
    ratio: Decimal,
    context: ErrorContext | None = None,
) -> Decimal:
    """Return the ceiling if amount fits under it, else raise DEPOSIT_LIMIT_EXCEEDED."""
    limit = deposit_limit(unpaid_sum, ratio)
    if amount > limit:
        raise LedgerError(
            ErrorKind.DEPOSIT_LIMIT_EXCEEDED,
            f"Deposit exceeds the limit of {ratio:%} of unpaid jobs ({limit})",
            context,
        )
    return limit
