"""
Shared fixtures for adversarial tests.

Provides a PostgreSQL connection pool (skipped when no database is
reachable) for race condition tests against the real constraints.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import PostgresAccountRepository, run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for adversarial tests, skipping without a database."""
    settings = get_settings()
    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=True)
    try:
        pool.wait(timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def pg_repository(pool: ConnectionPool) -> PostgresAccountRepository:
    """Repository on a freshly cleaned accounts table."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM accounts")
        conn.commit()
    return PostgresAccountRepository(pool)
