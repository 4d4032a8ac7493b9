"""
Exception handlers - Map domain error kinds to HTTP responses.

ValidationFailed  -> 422 with field and rule
Unauthenticated   -> 401 with a generic message
InternalError     -> 500, cause logged server-side only

Response bodies never carry internal diagnostics.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import InternalError, Unauthenticated, ValidationFailed

logger = logging.getLogger(__name__)


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field, "rule": exc.rule},
    )


async def unauthenticated_handler(request: Request, exc: Unauthenticated) -> JSONResponse:
    # Same body for unknown user, wrong password and bad token
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": "Invalid username or password"},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
    logger.exception("Internal error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on an application."""
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(Unauthenticated, unauthenticated_handler)
    app.add_exception_handler(InternalError, internal_error_handler)
