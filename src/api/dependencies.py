"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.clock import SystemClock
from src.adapters.jobs import HttpJobCatalog
from src.adapters.repository.postgres import PostgresUserRepository
from src.config.settings import Settings, get_settings
from src.domain.authentication import AuthenticationService
from src.domain.credentials import CredentialIssuer
from src.domain.hashing import BcryptHasher
from src.domain.registration import RegistrationService
from src.domain.validation import authentication_validator, registration_validator

# Module-level singleton - SystemClock is stateless
_clock = SystemClock()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_clock() -> SystemClock:
    """Get system clock (singleton)."""
    return _clock


def get_repository(
    request: Request, settings: Settings = Depends(get_settings)
) -> PostgresUserRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresUserRepository(pool, timeout_seconds=settings.db_timeout_seconds)


def get_hasher(settings: Settings = Depends(get_settings)) -> BcryptHasher:
    """Create bcrypt hasher with the configured cost factor."""
    return BcryptHasher(cost=settings.bcrypt_cost)


def get_registration_service(
    repository: PostgresUserRepository = Depends(get_repository),
    hasher: BcryptHasher = Depends(get_hasher),
    clock: SystemClock = Depends(get_clock),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    The repository serves both as the uniqueness lookup and the store.
    """
    return RegistrationService(
        validator=registration_validator(repository),
        clock=clock,
        hasher=hasher,
        users=repository,
    )


def get_authentication_service(
    repository: PostgresUserRepository = Depends(get_repository),
    hasher: BcryptHasher = Depends(get_hasher),
) -> AuthenticationService:
    """Create authentication service with injected dependencies."""
    return AuthenticationService(
        validator=authentication_validator(),
        users=repository,
        comparator=hasher,
    )


def get_credential_issuer(
    settings: Settings = Depends(get_settings),
    clock: SystemClock = Depends(get_clock),
) -> CredentialIssuer:
    """Create credential issuer from configured URL, lifetime and secret."""
    return CredentialIssuer(
        clock=clock,
        issuer_url=settings.app_url,
        lifetime=timedelta(seconds=settings.jwt_lifetime_seconds),
        secret=settings.app_secret,
    )


# HTTP Bearer security scheme for OpenAPI documentation
http_bearer = HTTPBearer()


def get_authenticated_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(http_bearer),
    issuer: CredentialIssuer = Depends(get_credential_issuer),
) -> int:
    """
    Verify the bearer token and return the user id it was issued for.

    FastAPI's HTTPBearer rejects a missing or non-Bearer Authorization
    header before this runs. An invalid or expired token raises
    Unauthenticated, which the app maps to 401.
    """
    return int(issuer.verify(credentials.credentials))


def get_job_catalog(request: Request) -> HttpJobCatalog:
    """
    Get the job catalog client from app state.

    The client is created during app lifespan startup and closed on shutdown.
    """
    return request.app.state.job_catalog
