"""Profile ORM — an account (client or contractor) holding a balance.

Invariants:
    - balance is NUMERIC(12, 2) and never negative (CHECK constraint)
    - role is 'client' or 'contractor' and never updated after insert
    - balance is written only by the ledger engine

Design Decisions:
    - No relationship() attributes: contracts are fetched by explicit query
    - role as String + CHECK instead of a native enum: same DDL on SQLite and Postgres
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base


class Profile(Base):
    """Profile entity — ledger account."""
    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="balance_non_negative"),
        CheckConstraint("role IN ('client', 'contractor')", name="role_valid"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    profession: Mapped[str] = mapped_column(String(100), nullable=False)
    balance: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00"),
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
