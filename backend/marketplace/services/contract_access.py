"""Contract Access — read paths guarded by contract participation.

Invariants:
    - get_contract returns a contract only to its client or contractor
    - Read-only: nothing here writes a balance or a job
"""

from marketplace.core.authorization import ensure_participant
from marketplace.core.domain_types import ContractId, ProfileId
from marketplace.core.errors import ErrorContext, LedgerError
from marketplace.core.records import ContractRecord
from marketplace.core.repository_protocols import LedgerTransaction


async def get_contract(
    tx: LedgerTransaction,
    contract_id: ContractId,
    acting_profile_id: ProfileId,
) -> ContractRecord:
    context = ErrorContext(
        operation="get_contract",
        contract_id=contract_id,
        profile_id=acting_profile_id,
    )
    contract = await tx.get_contract(contract_id)
    if contract is None:
        raise LedgerError.not_found("Contract", contract_id, context)
    ensure_participant(contract, acting_profile_id, context)
    return contract
