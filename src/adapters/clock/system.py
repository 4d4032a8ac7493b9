"""
System clock adapter - Implements Clock protocol.

Reads the host clock in UTC. The domain never calls datetime.now()
directly; tests substitute a fixed clock instead.
"""

from datetime import datetime, timezone


class SystemClock:
    """
    Implements Clock protocol via the host clock.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        return datetime.now(tz=timezone.utc)
