"""Job catalog adapters - External recruitment API clients."""

from .catalog import HttpJobCatalog

__all__ = ["HttpJobCatalog"]
