"""Ledger Records — immutable snapshots of rows handed from the store to the core.

Invariants:
    - Records are frozen: rules compute new values, the store persists them
    - Amounts are Decimal, never float
    - JobRecord.paid is True iff payment_date is not None

Design Decisions:
    - Plain dataclasses over ORM objects: no lazy loading can leak into the core,
      every join is an explicit store call
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from marketplace.core.domain_types import (
    ContractId, ContractStatus, JobId, JobState, ProfileId, ProfileRole,
)


@dataclass(frozen=True)
class ProfileRecord:
    id: ProfileId
    first_name: str
    last_name: str
    profession: str
    balance: Decimal
    role: ProfileRole


@dataclass(frozen=True)
class ContractRecord:
    id: ContractId
    terms: str
    client_id: ProfileId
    contractor_id: ProfileId
    status: ContractStatus


@dataclass(frozen=True)
class JobRecord:
    id: JobId
    contract_id: ContractId
    description: str
    price: Decimal
    paid: bool
    payment_date: datetime | None

    @property
    def state(self) -> JobState:
        return JobState.PAID if self.paid else JobState.UNPAID
