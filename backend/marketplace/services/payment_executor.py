"""Payment Executor — pays a job: authorize, transfer, latch, all in one transaction.

Invariants:
    - The job row is locked before it is inspected
    - Check order: job exists -> requester is the contract's client -> job unpaid
      -> contract in_progress
    - The balance transfer and the paid/payment_date latch commit together
    - update_job is guarded by paid = false; a miss means another payment won

Design Decisions:
    - Authorization before the paid check: a non-client learns nothing about
      a job's payment state
    - `now` injectable so tests can pin payment_date
"""

import dataclasses
import logging
from datetime import datetime, timezone

from marketplace.core.authorization import ensure_paying_client
from marketplace.core.domain_types import JobId, ProfileId
from marketplace.core.errors import ErrorContext, ErrorKind, LedgerError
from marketplace.core.ledger_rules import ensure_payable
from marketplace.core.repository_protocols import LedgerTransaction
from marketplace.schemas.ledger import JobView, PaymentResult
from marketplace.services.ledger_engine import transfer_funds

logger = logging.getLogger(__name__)


async def pay_job(
    tx: LedgerTransaction,
    job_id: JobId,
    requesting_client_id: ProfileId,
    *,
    now: datetime | None = None,
) -> PaymentResult:
    """Pay job_id from the requesting client's balance to the contractor."""
    context = ErrorContext(
        operation="pay_job", job_id=job_id, profile_id=requesting_client_id,
    )
    job = await tx.get_job(job_id, for_update=True)
    if job is None:
        raise LedgerError.not_found("Job", job_id, context)

    contract = await tx.get_contract(job.contract_id)
    if contract is None:
        raise LedgerError.not_found("Contract", job.contract_id, context)
    context.contract_id = contract.id

    ensure_paying_client(contract, requesting_client_id, context)
    ensure_payable(job, contract, context)

    transfer = await transfer_funds(
        tx, contract.client_id, contract.contractor_id, job.price,
    )

    payment_date = now or datetime.now(timezone.utc)
    latched = await tx.update_job(job.id, paid=True, payment_date=payment_date)
    if not latched:
        raise LedgerError(
            ErrorKind.ALREADY_PAID, f"Job {job.id} is already paid", context,
        )
    logger.debug(
        f"Job {job.id} latched as paid",
        extra={"operation": "pay_job", "job_id": job.id},
    )

    paid_job = dataclasses.replace(job, paid=True, payment_date=payment_date)
    return PaymentResult(
        job=JobView.model_validate(paid_job),
        client_balance=transfer.from_balance,
        contractor_balance=transfer.to_balance,
    )
