"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.jobs import HttpJobCatalog
from src.adapters.repository.postgres import run_migrations
from src.api.errors import register_exception_handlers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

tags_metadata = [
    {
        "name": "user",
        "description": "Register users and issue access tokens",
    },
    {
        "name": "job",
        "description": "Browse the external job catalog (bearer token required)",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    On startup: configures logging, opens the database pool, runs
    migrations and creates the job catalog client. On shutdown: closes
    both clients.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Connecting to database...")
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.db_timeout_seconds,
        open=True,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    app.state.pool = pool
    app.state.job_catalog = HttpJobCatalog(
        settings.jobs_base_url, timeout_seconds=settings.jobs_timeout_seconds
    )
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    app.state.job_catalog.close()
    pool.close()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="jobs-search",
    description="Job search API - User registration, access tokens and job catalog search",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(v1_router, prefix="/api/v1")


@app.get("/ping")
async def ping() -> dict[str, str]:
    """Liveness check that does not touch the database."""
    return {"message": "pong"}


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Readiness check with a database round trip.

    Raises if the database cannot be reached.
    """
    with request.app.state.pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy"}
