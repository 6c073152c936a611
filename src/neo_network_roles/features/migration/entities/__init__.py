"""Migration entities."""

from .status import MigrationStatus, MigrationBatchResult

__all__ = ["MigrationStatus", "MigrationBatchResult"]
