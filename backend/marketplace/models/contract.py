"""Contract ORM — an agreement between one client and one contractor.

Invariants:
    - client_id and contractor_id reference profiles.id
    - status in {'new', 'in_progress', 'terminated'}; transitions happen outside the ledger
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base


class Contract(Base):
    """Contract entity — gates which jobs are payable."""
    __tablename__ = "contracts"
    __table_args__ = (
        CheckConstraint(
            "status IN ('new', 'in_progress', 'terminated')", name="status_valid",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    terms: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="new",
    )
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id"), nullable=False, index=True,
    )
    contractor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
