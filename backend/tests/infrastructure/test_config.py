"""Settings — verifies environment parsing and validation.

Tests:
    - DATABASE_URL from the environment wins over the default
    - postgresql:// URLs are rewritten for asyncpg
    - deposit_limit_ratio must lie in (0, 1]
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from marketplace.config import Settings, get_settings


def test_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///other.db")
    assert Settings().database_url == "sqlite+aiosqlite:///other.db"


def test_postgres_url_is_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/ledger")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/ledger"


def test_defaults():
    settings = Settings(database_url="sqlite+aiosqlite:///x.db")
    assert settings.deposit_limit_ratio == Decimal("0.25")
    assert settings.database_pool_size == 20
    assert settings.database_isolation_level == "READ COMMITTED"
    assert settings.log_format == "json"


def test_deposit_ratio_from_environment(monkeypatch):
    monkeypatch.setenv("DEPOSIT_LIMIT_RATIO", "0.5")
    assert Settings().deposit_limit_ratio == Decimal("0.5")


@pytest.mark.parametrize("ratio", ["0", "-0.1", "1.5"])
def test_deposit_ratio_out_of_range_is_rejected(ratio):
    with pytest.raises(ValidationError):
        Settings(deposit_limit_ratio=ratio)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
