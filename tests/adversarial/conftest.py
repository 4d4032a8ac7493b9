"""
Shared fixtures for adversarial tests.

Provides a registration service wired to the real PostgreSQL store, so
concurrency tests exercise the database's unique constraint.
"""

from datetime import datetime, timezone

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.domain.hashing import BcryptHasher
from src.domain.registration import RegistrationService
from src.domain.validation import registration_validator



class _FrozenClock:
    def now(self) -> datetime:
        return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def build_registration_service(pool: ConnectionPool) -> RegistrationService:
    """Wire a registration service to its own repository instance."""
    repository = PostgresUserRepository(pool)
    return RegistrationService(
        validator=registration_validator(repository),
        clock=_FrozenClock(),
        hasher=BcryptHasher(cost=4),
        users=repository,
    )


@pytest.fixture
def service_factory(pool: ConnectionPool, clean_users: None):
    """Factory producing independently wired registration services."""
    return lambda: build_registration_service(pool)
