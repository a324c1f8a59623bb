"""Bootstrap — wires settings, logging, database and store into a LedgerService.

Invariants:
    - The only place that reads Settings and builds a DatabaseSessionManager
    - Callers own the returned service and call close_ledger_service on shutdown
"""

import logging

from marketplace.config import Settings, get_settings
from marketplace.infrastructure.database import DatabaseSessionManager
from marketplace.infrastructure.ledger_store import SqlLedgerStore
from marketplace.infrastructure.observability import setup_logging
from marketplace.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


def build_ledger_service(settings: Settings | None = None) -> LedgerService:
    """Build a LedgerService from settings (environment by default)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        isolation_level=settings.database_isolation_level,
    )
    logger.info("Ledger service started")
    return LedgerService(
        SqlLedgerStore(manager), deposit_limit_ratio=settings.deposit_limit_ratio,
    )


async def close_ledger_service(service: LedgerService) -> None:
    """Dispose the engine behind a service built by build_ledger_service."""
    await service.store.manager.dispose()
    logger.info("Ledger service shut down")
