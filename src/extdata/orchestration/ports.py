"""
Orchestration Layer Protocol Definitions
=========================================

Defines the collaborators the scheduler drives: a family collector and a
family store (cursor + persistence). Concrete implementations are the
FamilyAggregator and the TickRepository subclasses.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class SchedulerState(str, Enum):
    """Scheduler lifecycle state."""

    BOOTSTRAPPING = "bootstrapping"
    WAITING = "waiting"
    COLLECTING = "collecting"
    PERSISTING = "persisting"
    CANCELLED = "cancelled"
    FAILED = "failed"


class LoopOutcome(str, Enum):
    """Why the collection loop stopped."""

    CANCELLED = "cancelled"
    FAILED = "failed"


@runtime_checkable
class ICollector(Protocol):
    """Collects one record family from a watermark."""

    async def collect_family(self, since: int) -> list[Any]:
        """Return every record with time >= since (0 = full history)."""
        ...


@runtime_checkable
class ITickStore(Protocol):
    """Cursor store and idempotent persistence for one record family."""

    async def exists(self) -> bool:
        """Whether the family's table exists."""
        ...

    async def create_table(self) -> None:
        """Create the family's table if absent."""
        ...

    async def latest_time(self) -> int:
        """Newest stored time; raises NotFoundError when empty."""
        ...

    async def insert_many(self, records: Sequence[Any]) -> Any:
        """Insert, counting and skipping natural-key duplicates."""
        ...
