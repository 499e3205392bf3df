"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Concurrency Design
------------------
No application-level locking is used. The two cross-request guarantees
come from single atomic statements:

1. **Email uniqueness**: ``UNIQUE (email)`` plus
   ``INSERT ... ON CONFLICT (email) DO NOTHING RETURNING``. Of concurrent
   inserts for one email exactly one returns a row.

2. **Single token redemption**: ``UPDATE ... WHERE verification_token = %s
   AND verified = FALSE RETURNING``. The row lock taken by the UPDATE makes
   a second concurrent redemption re-check the WHERE clause against the
   committed row, find the token cleared, and return nothing.

Every psycopg error is wrapped in RepositoryError; "not found" is None.
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import RepositoryError
from src.domain.ports import Account

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = (
    "id, name, email, password_hash, verified, verification_token, created_at, verified_at"
)


def _row_to_account(row: tuple) -> Account:
    return Account(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        verified=row[4],
        verification_token=row[5],
        created_at=row[6],
        verified_at=row[7],
    )


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by normalized email, or None."""
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise RepositoryError(f"account lookup failed: {e}") from e

        return _row_to_account(row) if row is not None else None

    def create_account(
        self, name: str, email: str, password_hash: str, verification_token: str
    ) -> Account | None:
        """
        Insert an unverified account.

        Returns:
            The created account, or None if the email is already taken
        """
        sql = f"""
            INSERT INTO accounts (name, email, password_hash, verified, verification_token, created_at)
            VALUES (%s, %s, %s, FALSE, %s, NOW())
            ON CONFLICT (email) DO NOTHING
            RETURNING {_ACCOUNT_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (name, email, password_hash, verification_token))
                row = cursor.fetchone()
                conn.commit()
        except psycopg.Error as e:
            raise RepositoryError(f"account insert failed: {e}") from e

        return _row_to_account(row) if row is not None else None

    def redeem_verification_token(self, token: str) -> Account | None:
        """
        Atomically verify the account holding this token and clear the token.

        Returns:
            The verified account, or None if no unverified account holds the token
        """
        sql = f"""
            UPDATE accounts
            SET verified = TRUE, verification_token = NULL, verified_at = NOW()
            WHERE verification_token = %s AND verified = FALSE
            RETURNING {_ACCOUNT_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (token,))
                row = cursor.fetchone()
                conn.commit()
        except psycopg.Error as e:
            # The connection context rolls back on error, nothing is committed
            raise RepositoryError(f"verification update failed: {e}") from e

        return _row_to_account(row) if row is not None else None


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
