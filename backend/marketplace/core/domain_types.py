"""Domain Types — rich types that replace bare primitives across the ledger.

Invariants:
    - ProfileId, ContractId, JobId wrap integer primary keys
    - All valid states encoded as Enums — no raw string matching
    - Money is always a Decimal quantized to MONEY_QUANTUM

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: values match the DB columns and serialize to JSON as-is
"""

from decimal import Decimal
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProfileId = NewType("ProfileId", int)
ContractId = NewType("ContractId", int)
JobId = NewType("JobId", int)


# ─── Value Types ─────────────────────────────────────────────────

MONEY_QUANTUM = Decimal("0.01")
# NUMERIC(12, 2): ten integer digits
MAX_MONEY = Decimal("9999999999.99")
DEFAULT_DEPOSIT_LIMIT_RATIO = Decimal("0.25")


# ─── Enums ───────────────────────────────────────────────────────

class ProfileRole(str, Enum):
    """Profile role — fixed at creation."""
    CLIENT = "client"
    CONTRACTOR = "contractor"


class ContractStatus(str, Enum):
    """Contract lifecycle states — maps to DB `status` column."""
    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


class JobState(str, Enum):
    """Job payment states. UNPAID -> PAID is the only transition."""
    UNPAID = "unpaid"
    PAID = "paid"
