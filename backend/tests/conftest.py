"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every DB test gets a fresh database file under tmp_path
    - The seed is the same for every test (see SEED below)
    - tests/services/ledger_helpers.py reads state back in a separate transaction

Design Decisions:
    - File-backed, not :memory:: concurrent transactions need separate connections
      to the same database to exercise BEGIN IMMEDIATE serialization

SEED:
    profiles   1 client 1150 | 2 client 231.11 | 3 client 100 | 4 client 0
               5 contractor 150 | 6 contractor 64 | 8 contractor 120
    contracts  1: 1->5 in_progress | 2: 1->8 terminated | 3: 2->6 in_progress
               4: 3->5 in_progress | 5: 1->6 new
    jobs       1: c1 200 paid | 2: c1 110 | 3: c1 300 | 4: c2 500
               5: c3 150 | 6: c4 250 | 7: c5 50
"""

import os
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from marketplace.db.base import Base
from marketplace.infrastructure.database import DatabaseSessionManager
from marketplace.infrastructure.ledger_store import SqlLedgerStore
from marketplace.models.contract import Contract
from marketplace.models.job import Job
from marketplace.models.profile import Profile
from marketplace.services.ledger_service import LedgerService

# Ensure tests never reach a real database server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)


def _profile(pid, first_name, role, balance):
    return Profile(
        id=pid, first_name=first_name, last_name="Test",
        profession="Tester", role=role, balance=Decimal(balance),
    )


def _job(jid, contract_id, price, paid=False):
    return Job(
        id=jid, contract_id=contract_id, description=f"work {jid}",
        price=Decimal(price), paid=paid,
        payment_date=(
            datetime(2020, 8, 15, 19, 11, 26, tzinfo=timezone.utc) if paid else None
        ),
    )


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'ledger.sqlite3'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def seeded(db_manager):
    async with db_manager.transaction() as db:
        db.add_all([
            _profile(1, "Harry", "client", "1150"),
            _profile(2, "Mr Robot", "client", "231.11"),
            _profile(3, "Ash", "client", "100"),
            _profile(4, "No contract", "client", "0"),
            _profile(5, "John", "contractor", "150"),
            _profile(6, "Linus", "contractor", "64"),
            _profile(8, "Andy", "contractor", "120"),
        ])
        await db.flush()
        db.add_all([
            Contract(id=1, terms="bla bla bla", status="in_progress", client_id=1, contractor_id=5),
            Contract(id=2, terms="pew pew pew", status="terminated", client_id=1, contractor_id=8),
            Contract(id=3, terms="lorem ipsum", status="in_progress", client_id=2, contractor_id=6),
            Contract(id=4, terms="dolor sit", status="in_progress", client_id=3, contractor_id=5),
            Contract(id=5, terms="amet", status="new", client_id=1, contractor_id=6),
        ])
        await db.flush()
        db.add_all([
            _job(1, 1, "200", paid=True),
            _job(2, 1, "110"),
            _job(3, 1, "300"),
            _job(4, 2, "500"),
            _job(5, 3, "150"),
            _job(6, 4, "250"),
            _job(7, 5, "50"),
        ])
    return db_manager


@pytest.fixture
def store(seeded):
    return SqlLedgerStore(seeded)


@pytest.fixture
def ledger(store):
    return LedgerService(store)
