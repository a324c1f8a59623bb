"""Boundary Protocols — contracts between the ledger core and the persistent store.

Invariants:
    - Core and services NEVER import the SQL implementation; they see these Protocols
    - Every mutating call goes through a LedgerTransaction handle
    - A LedgerStore.transaction() scope commits on success and rolls back on any error
    - update_job only transitions unpaid rows (one-way latch)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the pure rules in core/ stay sync
    - for_update flag on reads: row locks are requested explicitly by the caller
"""

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from marketplace.core.domain_types import ContractId, JobId, ProfileId
from marketplace.core.records import ContractRecord, JobRecord, ProfileRecord


class LedgerTransaction(Protocol):
    """Data access inside one open transaction — implemented by infrastructure."""

    async def get_profile(
        self, profile_id: ProfileId, *, for_update: bool = False,
    ) -> ProfileRecord | None: ...

    async def update_profile_balance(
        self, profile_id: ProfileId, new_balance: Decimal,
    ) -> None: ...

    async def get_contract(self, contract_id: ContractId) -> ContractRecord | None: ...

    async def get_job(
        self, job_id: JobId, *, for_update: bool = False,
    ) -> JobRecord | None: ...

    async def update_job(
        self, job_id: JobId, *, paid: bool, payment_date: datetime,
    ) -> bool: ...

    async def sum_unpaid_job_prices(self, client_id: ProfileId) -> Decimal: ...

    async def list_active_contracts(
        self, profile_id: ProfileId,
    ) -> list[ContractRecord]: ...

    async def list_unpaid_jobs(self, profile_id: ProfileId) -> list[JobRecord]: ...


class LedgerStore(Protocol):
    """Opens transaction scopes — implemented by infrastructure."""

    def transaction(self) -> AbstractAsyncContextManager[LedgerTransaction]: ...
