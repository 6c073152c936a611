"""Migration feature for neo-network-roles.

- entities/: migration state and batch results
- services/: the setup and user relationship migration coordinator
"""

from .entities import MigrationStatus, MigrationBatchResult
from .services import MigrationCoordinator

__all__ = ["MigrationStatus", "MigrationBatchResult", "MigrationCoordinator"]
