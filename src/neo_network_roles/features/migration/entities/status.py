"""Migration state."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class MigrationStatus(str, Enum):
    """State of the one-time user relationship migration."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass(frozen=True)
class MigrationBatchResult:
    """Outcome of one migration trigger."""

    processed_user_ids: Tuple[int, ...] = ()
    administrator_grants: int = 0
    status: MigrationStatus = MigrationStatus.NOT_STARTED

    @property
    def processed(self) -> int:
        return len(self.processed_user_ids)
