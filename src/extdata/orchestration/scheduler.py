"""
Collection Scheduler
====================

Bootstraps every record family once (full backfill for new tables,
catch-up from the stored watermark otherwise), then polls all families on a
fixed interval until cancelled or until a cycle fails.

    Bootstrapping -> Waiting -> Collecting -> Persisting -> Waiting ...
                        |
                        +-> Cancelled

Cancellation is cooperative: the event is only observed while Waiting, so a
cycle that has started always runs to completion.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from extdata.infrastructure.impls import SystemClock
from extdata.infrastructure.observability import get_pipeline_logger
from extdata.infrastructure.ports import IClock
from extdata.ingestion.config.value_objects import SchedulerSettings
from extdata.ingestion.exceptions import NotFoundError
from extdata.orchestration.ports import (
    ICollector,
    ITickStore,
    LoopOutcome,
    SchedulerState,
)
from extdata.shared.models import RecordFamily


@dataclass
class FamilyPipeline:
    """Collector, store and in-memory watermark of one record family."""

    family: RecordFamily
    collector: ICollector
    store: ITickStore
    watermark: int = 0


class CollectionScheduler:
    """
    Drives bootstrap and the periodic collection loop.

    Only one cycle ever runs at a time; each family's watermark is owned by
    the scheduler and advances only when a cycle for that family succeeds.
    """

    def __init__(
        self,
        pipelines: Sequence[FamilyPipeline],
        settings: SchedulerSettings | None = None,
        clock: IClock | None = None,
        cancel_event: asyncio.Event | None = None,
    ):
        """
        Initialize scheduler.

        Args:
            pipelines: One pipeline per family, processed in order
            settings: Poll interval, lead time before a boundary
            clock: Wall clock
            cancel_event: Shared shutdown signal
        """
        self.pipelines = list(pipelines)
        self.settings = settings or SchedulerSettings()
        self.clock = clock or SystemClock()
        self.cancel_event = cancel_event or asyncio.Event()
        self.state = SchedulerState.BOOTSTRAPPING
        self.cycles = 0
        self.log = get_pipeline_logger()

    @property
    def watermarks(self) -> dict[RecordFamily, int]:
        return {p.family: p.watermark for p in self.pipelines}

    def cancel(self) -> None:
        """Request shutdown; honoured at the next Waiting point."""
        self.cancel_event.set()

    # ------------------------------------------------------------------
    # Bootstrapping
    # ------------------------------------------------------------------

    async def bootstrap(self) -> None:
        """
        One-shot backfill/catch-up for every family.

        Raises:
            ExtDataError: Any failure; startup cannot continue
        """
        self.state = SchedulerState.BOOTSTRAPPING
        for pipeline in self.pipelines:
            await self._bootstrap_family(pipeline)

    async def _bootstrap_family(self, pipeline: FamilyPipeline) -> None:
        log = self.log.bind(family=pipeline.family.value)

        if await pipeline.store.exists():
            since = await self._read_watermark(pipeline.store)
            log.info("catching_up", since=since)
        else:
            log.info("creating_table")
            await pipeline.store.create_table()
            since = 0
            log.info("backfilling")

        records = await pipeline.collector.collect_family(since)
        result = await pipeline.store.insert_many(records)
        pipeline.watermark = await self._read_watermark(pipeline.store)

        log.info(
            "bootstrap_persisted",
            collected=len(records),
            inserted=result.inserted,
            duplicates=result.duplicates,
            watermark=pipeline.watermark,
        )

    @staticmethod
    async def _read_watermark(store: ITickStore) -> int:
        try:
            return await store.latest_time()
        except NotFoundError:
            return 0

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def first_fire_time(self) -> int:
        """
        Shortly before the first interval boundary after the oldest
        watermark, or now if that moment has passed.
        """
        oldest = min((p.watermark for p in self.pipelines), default=0)
        target = oldest + self.settings.poll_interval - self.settings.poll_lead
        return max(target, self.clock.time())

    def next_fire_time(self, previous: int, now: int) -> int:
        """Next boundary on the interval grid after `now`, skipping missed ones."""
        interval = self.settings.poll_interval
        nxt = previous + interval
        if nxt < now:
            nxt += ((now - nxt) // interval + 1) * interval
        return nxt

    async def run(self) -> LoopOutcome:
        """
        Poll until cancelled or a cycle fails.

        Returns:
            LoopOutcome.CANCELLED on shutdown, LoopOutcome.FAILED after a
            logged cycle error (fail-stop, no restart)
        """
        fire_at = self.first_fire_time()
        self.log.info("collector_started", first_fire=fire_at, watermarks=self._watermark_context())

        while True:
            self.state = SchedulerState.WAITING
            if await self._wait_until(fire_at):
                self.state = SchedulerState.CANCELLED
                self.log.info("collector_cancelled", cycles=self.cycles)
                return LoopOutcome.CANCELLED

            fired_at = self.clock.time()
            try:
                await self.run_cycle(fired_at)
            except Exception:
                self.state = SchedulerState.FAILED
                self.log.exception(
                    "cycle_failed", fired_at=fired_at, watermarks=self._watermark_context()
                )
                return LoopOutcome.FAILED

            fire_at = self.next_fire_time(fire_at, self.clock.time())

    async def run_cycle(self, fired_at: int) -> None:
        """Collect and persist every family once, from its watermark."""
        for pipeline in self.pipelines:
            log = self.log.bind(family=pipeline.family.value)

            self.state = SchedulerState.COLLECTING
            log.info("cycle_collecting", since=pipeline.watermark)
            records = await pipeline.collector.collect_family(pipeline.watermark)

            self.state = SchedulerState.PERSISTING
            result = await pipeline.store.insert_many(records)
            pipeline.watermark = max(pipeline.watermark, fired_at)

            log.info(
                "cycle_persisted",
                collected=len(records),
                inserted=result.inserted,
                duplicates=result.duplicates,
                watermark=pipeline.watermark,
            )
        self.cycles += 1

    async def _wait_until(self, target: int) -> bool:
        """Sleep until target or cancellation; True if cancelled."""
        if self.cancel_event.is_set():
            return True
        delay = target - self.clock.time()
        if delay <= 0:
            return False
        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    def _watermark_context(self) -> dict[str, int]:
        return {p.family.value: p.watermark for p in self.pipelines}
