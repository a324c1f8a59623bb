"""Ledger Service — the caller-facing API; one store transaction per operation.

Invariants:
    - Each public method opens exactly one LedgerStore.transaction()
    - A LedgerError (or any exception) inside the block rolls the whole scope back
    - Success is logged after commit, with ids only; failures are re-raised unlogged

Design Decisions:
    - Thin facade over module functions: the functions take an explicit
      transaction handle, the facade owns the transaction boundary
    - Logging failures is the caller's job: the caller decides what a rejected
      deposit or payment means operationally
"""

import logging
from decimal import Decimal

from marketplace.core.domain_types import (
    DEFAULT_DEPOSIT_LIMIT_RATIO, ContractId, JobId, ProfileId,
)
from marketplace.core.repository_protocols import LedgerStore
from marketplace.schemas.ledger import (
    ContractView, DepositResult, JobView, PaymentResult, TransferResult,
)
from marketplace.services import contract_access, deposit_admission, ledger_engine
from marketplace.services import payment_executor

logger = logging.getLogger(__name__)


class LedgerService:
    """Balance mutation and guarded reads over a LedgerStore."""

    def __init__(
        self,
        store: LedgerStore,
        deposit_limit_ratio: Decimal = DEFAULT_DEPOSIT_LIMIT_RATIO,
    ):
        self.store = store
        self.deposit_limit_ratio = deposit_limit_ratio

    async def transfer_funds(
        self, from_profile_id: ProfileId, to_profile_id: ProfileId, amount: object,
    ) -> TransferResult:
        async with self.store.transaction() as tx:
            result = await ledger_engine.transfer_funds(
                tx, from_profile_id, to_profile_id, amount,
            )
        logger.info(
            f"Transfer committed: profile {from_profile_id} -> {to_profile_id}",
            extra={"operation": "transfer_funds", "profile_id": from_profile_id},
        )
        return result

    async def admit_deposit(
        self, client_id: ProfileId, amount: object,
    ) -> DepositResult:
        async with self.store.transaction() as tx:
            result = await deposit_admission.admit_deposit(
                tx, client_id, amount, limit_ratio=self.deposit_limit_ratio,
            )
        logger.info(
            f"Deposit committed for client {client_id}",
            extra={"operation": "admit_deposit", "profile_id": client_id},
        )
        return result

    async def pay_job(
        self, job_id: JobId, requesting_client_id: ProfileId,
    ) -> PaymentResult:
        async with self.store.transaction() as tx:
            result = await payment_executor.pay_job(tx, job_id, requesting_client_id)
        logger.info(
            f"Payment committed for job {job_id}",
            extra={
                "operation": "pay_job",
                "job_id": job_id,
                "profile_id": requesting_client_id,
            },
        )
        return result

    async def get_contract(
        self, contract_id: ContractId, acting_profile_id: ProfileId,
    ) -> ContractView:
        async with self.store.transaction() as tx:
            contract = await contract_access.get_contract(
                tx, contract_id, acting_profile_id,
            )
        return ContractView.model_validate(contract)

    async def list_active_contracts(
        self, profile_id: ProfileId,
    ) -> list[ContractView]:
        async with self.store.transaction() as tx:
            contracts = await tx.list_active_contracts(profile_id)
        return [ContractView.model_validate(c) for c in contracts]

    async def list_unpaid_jobs(self, profile_id: ProfileId) -> list[JobView]:
        async with self.store.transaction() as tx:
            jobs = await tx.list_unpaid_jobs(profile_id)
        return [JobView.model_validate(j) for j in jobs]
