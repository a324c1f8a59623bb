"""Ledger Schemas — Pydantic result models returned to callers of LedgerService.

Invariants:
    - Amounts are Decimal with two places (serialized as strings in JSON mode)
    - Views are built from core records via from_attributes, never from ORM rows

Design Decisions:
    - Pydantic at the boundary: callers get validated, serializable results
      while core/ keeps plain dataclasses
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from marketplace.core.domain_types import ContractStatus


class ContractView(BaseModel):
    """Contract as seen by one of its participants."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    terms: str
    client_id: int
    contractor_id: int
    status: ContractStatus


class JobView(BaseModel):
    """Job state after a read or a payment."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    description: str
    price: Decimal
    paid: bool
    payment_date: datetime | None = None


class TransferResult(BaseModel):
    """Balances of both parties after a transfer."""
    from_profile_id: int
    to_profile_id: int
    amount: Decimal
    from_balance: Decimal
    to_balance: Decimal


class DepositResult(BaseModel):
    """Client balance after an admitted deposit."""
    client_id: int
    amount: Decimal
    new_balance: Decimal
    deposit_limit: Decimal


class PaymentResult(BaseModel):
    """Paid job plus the balances the payment produced."""
    job: JobView
    client_balance: Decimal
    contractor_balance: Decimal
