"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
user store ports using psycopg3 with raw SQL.

Consistency Design:
-------------------
1. **Unique constraint**: users.username is UNIQUE. The domain checks
   uniqueness before inserting, but that check and the insert are not
   atomic. A concurrent registration that loses the race hits the
   constraint, and the UniqueViolation is reported as
   ValidationFailed("username", "unique").

2. **Transactions**: Every store_user call runs in its own transaction,
   committed on success and rolled back on any error.

3. **Bounded waits**: Pool checkout uses a timeout and every statement runs
   under a transaction-local statement_timeout, so a stalled database
   surfaces as InternalError instead of hanging the request.
"""

import logging
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool, PoolTimeout

from src.domain.exceptions import InternalError, UserNotFound, ValidationFailed
from src.domain.ports import User

logger = logging.getLogger(__name__)


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, timeout_seconds: float = 5.0) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            timeout_seconds: Upper bound for pool checkout and each statement
        """
        self._pool = pool
        self._timeout = timeout_seconds

    def get_user_by_username(self, username: str) -> User:
        """
        Fetch a user by username.

        Args:
            username: Exact username (case-sensitive)

        Returns:
            The stored user

        Raises:
            UserNotFound: If no row has this username
            InternalError: On connection, timeout or query failure
        """
        sql = """
            SELECT id, username, password, created_at, updated_at
            FROM users
            WHERE username = %s
            LIMIT 1
        """

        try:
            with self._pool.connection(timeout=self._timeout) as conn, conn.cursor() as cursor:
                self._apply_statement_timeout(cursor)
                cursor.execute(sql, (username,))
                row = cursor.fetchone()
        except (psycopg.Error, PoolTimeout) as e:
            raise InternalError("querying postgres users table") from e

        if row is None:
            raise UserNotFound(username)

        return User(
            id=row[0],
            username=row[1],
            password=row[2],
            created_at=row[3],
            updated_at=row[4],
        )

    def store_user(self, user: User) -> None:
        """
        Insert or update a user.

        A non-positive user.id inserts a new row and writes the generated
        id back onto ``user``. A positive id updates username, password and
        updated_at of that row.

        Raises:
            ValidationFailed: If the username is already taken
            UserNotFound: If updating an id that has no row
            InternalError: On connection, timeout or query failure
        """
        insert_sql = """
            INSERT INTO users (username, password, created_at, updated_at)
            VALUES (%s, %s, %s, %s)
            RETURNING id
        """

        update_sql = """
            UPDATE users
            SET username = %s, password = %s, updated_at = %s
            WHERE id = %s
        """

        try:
            with self._pool.connection(timeout=self._timeout) as conn, conn.cursor() as cursor:
                self._apply_statement_timeout(cursor)
                if user.id <= 0:
                    cursor.execute(
                        insert_sql,
                        (user.username, user.password, user.created_at, user.updated_at),
                    )
                    row = cursor.fetchone()
                    conn.commit()
                    user.id = row[0]
                    return

                cursor.execute(update_sql, (user.username, user.password, user.updated_at, user.id))
                if cursor.rowcount == 0:
                    conn.rollback()
                    raise UserNotFound(str(user.id))
                conn.commit()
        except errors.UniqueViolation:
            logger.info("Username %s lost a concurrent registration race", user.username)
            raise ValidationFailed("username", "unique") from None
        except (psycopg.Error, PoolTimeout) as e:
            raise InternalError("storing user in postgres") from e

    def _apply_statement_timeout(self, cursor: psycopg.Cursor) -> None:
        # Transaction-local, so pooled connections are not left altered.
        cursor.execute(
            "SELECT set_config('statement_timeout', %s, true)",
            (str(int(self._timeout * 1000)),),
        )


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
