"""Job ORM — a billable unit of work under a contract, paid at most once.

Invariants:
    - price is NUMERIC(12, 2) and strictly positive
    - paid is a one-way latch; payment_date is set iff paid (CHECK constraint)
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, ForeignKey, Integer, Numeric, Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base


class Job(Base):
    """Job entity — the unit the payment executor settles."""
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("price > 0", name="price_positive"),
        CheckConstraint(
            "(paid AND payment_date IS NOT NULL) "
            "OR (NOT paid AND payment_date IS NULL)",
            name="paid_has_payment_date",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contract_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contracts.id"), nullable=False, index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    payment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
