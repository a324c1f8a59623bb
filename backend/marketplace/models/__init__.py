"""ORM Models — SQLAlchemy declarative models for profiles, contracts and jobs.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models carry no relationship() attributes; joins are explicit queries

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from marketplace.models.profile import Profile  # noqa: F401
from marketplace.models.contract import Contract  # noqa: F401
from marketplace.models.job import Job  # noqa: F401
