"""Migration services."""

from .migration_coordinator import MigrationCoordinator

__all__ = ["MigrationCoordinator"]
