"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fixed clock
- An in-memory user store implementing both store ports
- A fast bcrypt hasher
- Wired domain services and credential issuer
- A PostgreSQL connection pool for integration tests
"""

import os
from collections.abc import Generator
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.authentication import AuthenticationService
from src.domain.credentials import CredentialIssuer
from src.domain.exceptions import UserNotFound, ValidationFailed
from src.domain.hashing import BcryptHasher
from src.domain.ports import User
from src.domain.registration import RegistrationService
from src.domain.validation import authentication_validator, registration_validator

FIXED_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

# HS512 signing key long enough to avoid PyJWT key-length warnings
TEST_SECRET = "test-secret-" + "x" * 64
TEST_ISSUER = "http://jobs-search.test"

# Settings has no built-in signing key; app-level tests read this one
os.environ.setdefault("APP_SECRET", TEST_SECRET)


class FixedClock:
    """Clock whose current time only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


class InMemoryUserRepository:
    """Dict-backed user store with the same contract as the Postgres adapter."""

    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self.store_calls = 0
        self.lookup_calls = 0
        self._next_id = 1

    def get_user_by_username(self, username: str) -> User:
        self.lookup_calls += 1
        for user in self.users.values():
            if user.username == username:
                return replace(user)
        raise UserNotFound(username)

    def store_user(self, user: User) -> None:
        self.store_calls += 1
        for existing in self.users.values():
            if existing.username == user.username and existing.id != user.id:
                raise ValidationFailed("username", "unique")

        if user.id <= 0:
            user.id = self._next_id
            self._next_id += 1
        elif user.id not in self.users:
            raise UserNotFound(str(user.id))

        self.users[user.id] = replace(user)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def hasher() -> BcryptHasher:
    # Minimum bcrypt cost keeps the suite fast
    return BcryptHasher(cost=4)


@pytest.fixture
def registration_service(
    repository: InMemoryUserRepository, hasher: BcryptHasher, clock: FixedClock
) -> RegistrationService:
    return RegistrationService(
        validator=registration_validator(repository),
        clock=clock,
        hasher=hasher,
        users=repository,
    )


@pytest.fixture
def authentication_service(
    repository: InMemoryUserRepository, hasher: BcryptHasher
) -> AuthenticationService:
    return AuthenticationService(
        validator=authentication_validator(),
        users=repository,
        comparator=hasher,
    )


@pytest.fixture
def issuer(clock: FixedClock) -> CredentialIssuer:
    return CredentialIssuer(
        clock=clock,
        issuer_url=TEST_ISSUER,
        lifetime=timedelta(hours=1),
        secret=TEST_SECRET,
    )


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool for tests that need PostgreSQL.

    Skips the requesting test when the configured database is unreachable,
    and applies migrations once per session.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=3)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_users(pool: ConnectionPool) -> None:
    """Empty the users table before a test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.commit()
