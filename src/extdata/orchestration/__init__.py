"""
Orchestration: bootstrap every record family, then poll on a fixed interval
until shutdown or the first failed cycle.
"""

from extdata.orchestration.ports import (
    ICollector,
    ITickStore,
    LoopOutcome,
    SchedulerState,
)
from extdata.orchestration.scheduler import CollectionScheduler, FamilyPipeline

__all__ = [
    "CollectionScheduler",
    "FamilyPipeline",
    "ICollector",
    "ITickStore",
    "LoopOutcome",
    "SchedulerState",
]
