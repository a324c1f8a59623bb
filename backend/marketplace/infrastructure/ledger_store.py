"""SQL Ledger Store — LedgerStore/LedgerTransaction over SQLAlchemy async sessions.

Invariants:
    - Every read returns a frozen record, never an ORM instance
    - Reads refresh from the database (populate_existing): no stale identity-map rows
    - for_update=True emits SELECT ... FOR UPDATE (a no-op on SQLite, which holds
      the database write lock for the whole transaction instead)
    - update_job matches only unpaid rows and reports whether it changed one
    - Joins across profiles/contracts/jobs are spelled out in each query

Design Decisions:
    - Bulk UPDATE statements with synchronize_session=False: the store never
      hands out ORM objects, so there is no session state to keep in sync
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from typing import AsyncGenerator

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import (
    MONEY_QUANTUM, ContractId, ContractStatus, JobId, ProfileId, ProfileRole,
)
from marketplace.core.records import ContractRecord, JobRecord, ProfileRecord
from marketplace.infrastructure.database import DatabaseSessionManager
from marketplace.models.contract import Contract
from marketplace.models.job import Job
from marketplace.models.profile import Profile

logger = logging.getLogger(__name__)


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_QUANTUM)


def _profile_record(row: Profile) -> ProfileRecord:
    return ProfileRecord(
        id=ProfileId(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        profession=row.profession,
        balance=_money(row.balance),
        role=ProfileRole(row.role),
    )


def _contract_record(row: Contract) -> ContractRecord:
    return ContractRecord(
        id=ContractId(row.id),
        terms=row.terms,
        client_id=ProfileId(row.client_id),
        contractor_id=ProfileId(row.contractor_id),
        status=ContractStatus(row.status),
    )


def _job_record(row: Job) -> JobRecord:
    return JobRecord(
        id=JobId(row.id),
        contract_id=ContractId(row.contract_id),
        description=row.description,
        price=_money(row.price),
        paid=bool(row.paid),
        payment_date=row.payment_date,
    )


class SqlLedgerTransaction:
    """LedgerTransaction bound to one open AsyncSession transaction."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(
        self, profile_id: ProfileId, *, for_update: bool = False,
    ) -> ProfileRecord | None:
        query = (
            select(Profile)
            .where(Profile.id == profile_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        row = result.scalar_one_or_none()
        return _profile_record(row) if row else None

    async def update_profile_balance(
        self, profile_id: ProfileId, new_balance: Decimal,
    ) -> None:
        await self.db.execute(
            update(Profile)
            .where(Profile.id == profile_id)
            .values(balance=new_balance)
            .execution_options(synchronize_session=False)
        )

    async def get_contract(self, contract_id: ContractId) -> ContractRecord | None:
        result = await self.db.execute(
            select(Contract)
            .where(Contract.id == contract_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _contract_record(row) if row else None

    async def get_job(
        self, job_id: JobId, *, for_update: bool = False,
    ) -> JobRecord | None:
        query = (
            select(Job)
            .where(Job.id == job_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        row = result.scalar_one_or_none()
        return _job_record(row) if row else None

    async def update_job(
        self, job_id: JobId, *, paid: bool, payment_date: datetime,
    ) -> bool:
        """Latch an unpaid job. Returns False when no unpaid row matched."""
        result = await self.db.execute(
            update(Job)
            .where(Job.id == job_id)
            .where(Job.paid.is_(False))
            .values(paid=paid, payment_date=payment_date)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.debug(f"Job {job_id} latch matched no unpaid row")
            return False
        return True

    async def sum_unpaid_job_prices(self, client_id: ProfileId) -> Decimal:
        """Sum of unpaid job prices over the client's in_progress contracts."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Job.price), 0))
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .where(Contract.client_id == client_id)
            .where(Contract.status == ContractStatus.IN_PROGRESS.value)
            .where(Job.paid.is_(False))
        )
        return _money(result.scalar_one())

    async def list_active_contracts(
        self, profile_id: ProfileId,
    ) -> list[ContractRecord]:
        result = await self.db.execute(
            select(Contract)
            .where(or_(
                Contract.client_id == profile_id,
                Contract.contractor_id == profile_id,
            ))
            .where(Contract.status != ContractStatus.TERMINATED.value)
            .order_by(Contract.id)
        )
        return [_contract_record(row) for row in result.scalars().all()]

    async def list_unpaid_jobs(self, profile_id: ProfileId) -> list[JobRecord]:
        result = await self.db.execute(
            select(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .where(or_(
                Contract.client_id == profile_id,
                Contract.contractor_id == profile_id,
            ))
            .where(Contract.status == ContractStatus.IN_PROGRESS.value)
            .where(Job.paid.is_(False))
            .order_by(Job.id)
        )
        return [_job_record(row) for row in result.scalars().all()]


class SqlLedgerStore:
    """LedgerStore backed by a DatabaseSessionManager."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[SqlLedgerTransaction, None]:
        async with self.manager.transaction() as db:
            yield SqlLedgerTransaction(db)
