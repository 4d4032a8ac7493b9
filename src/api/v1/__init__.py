"""
API v1 package.

Contains versioned API routes for user registration, authentication and
the job catalog.
"""

from src.api.v1.routes import router

__all__ = ["router"]
