"""Clock adapters - Time source implementations."""

from .system import SystemClock

__all__ = ["SystemClock"]
