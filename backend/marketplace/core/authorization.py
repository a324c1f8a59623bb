"""Authorization Guard — who may touch a contract and the jobs under it.

Invariants:
    - Participants of a contract are exactly its client and its contractor
    - Only the contract's client may pay for its jobs
    - Guards raise UNAUTHORIZED and return None on success

Design Decisions:
    - Pure functions over a ContractRecord: the caller loads the contract,
      the guard only decides
"""

from marketplace.core.errors import ErrorContext, ErrorKind, LedgerError
from marketplace.core.records import ContractRecord


def is_participant(contract: ContractRecord, acting_profile_id: int) -> bool:
    return acting_profile_id in (contract.client_id, contract.contractor_id)


def ensure_participant(
    contract: ContractRecord,
    acting_profile_id: int,
    context: ErrorContext | None = None,
) -> None:
    """Fail unless the acting profile is the contract's client or contractor."""
    if not is_participant(contract, acting_profile_id):
        raise LedgerError(
            ErrorKind.UNAUTHORIZED,
            f"Profile {acting_profile_id} is not a party to contract {contract.id}",
            context,
        )


def ensure_paying_client(
    contract: ContractRecord,
    acting_profile_id: int,
    context: ErrorContext | None = None,
) -> None:
    """Fail unless the acting profile is the contract's client."""
    if contract.client_id != acting_profile_id:
        raise LedgerError(
            ErrorKind.UNAUTHORIZED,
            f"Profile {acting_profile_id} is not the client of contract {contract.id}",
            context,
        )
