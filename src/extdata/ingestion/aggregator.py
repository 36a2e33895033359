"""
Family Aggregator
=================

Runs every enabled adapter of one record family against the same cursor,
follows bounded-page sources until their history is exhausted, and returns
the union of the results keyed by natural key.
"""

from collections.abc import Sequence

from extdata.infrastructure.impls import SystemClock
from extdata.infrastructure.observability import get_ingestion_logger
from extdata.infrastructure.ports import IClock
from extdata.ingestion.adapters.base import BaseAdapter
from extdata.shared.models import RecordFamily, Tick


class FamilyAggregator:
    """
    Collects one record family from all of its enabled sources.

    Responsibilities:
    - Call each adapter with the shared `since` cursor
    - Drive the backfill loop for adapters reporting a page_limit
    - De-duplicate the union by (time, source)
    - NOT responsible for: retries (none), persistence, cursor bookkeeping

    A failing adapter aborts the whole call; nothing gathered so far in the
    call is returned.
    """

    def __init__(
        self,
        family: RecordFamily,
        adapters: Sequence[BaseAdapter],
        clock: IClock | None = None,
        safety_interval: int = 3600,
    ):
        """
        Initialize aggregator.

        Args:
            family: Record family all adapters must produce
            adapters: Enabled adapters, run in order
            clock: Wall clock used for the backfill safety horizon
            safety_interval: Seconds before "now" at which paging stops
        """
        mismatched = [a.name for a in adapters if a.family != family]
        if mismatched:
            raise ValueError(f"Adapters {mismatched} do not produce {family.value} records")

        self.family = family
        self.adapters = list(adapters)
        self.clock = clock or SystemClock()
        self.safety_interval = safety_interval
        self.log = get_ingestion_logger("aggregator", family=family.value)

    async def collect_family(self, since: int) -> list[Tick]:
        """
        Collect every enabled source from `since`.

        Args:
            since: Watermark in unix seconds; 0 means full history

        Returns:
            Union of all adapters' ticks, unique by natural key
        """
        collected: list[Tick] = []
        for adapter in self.adapters:
            ticks = await self._collect_adapter(adapter, since)
            self.log.info("source_collected", source=adapter.name, since=since, count=len(ticks))
            collected.extend(ticks)

        unique = self._union(collected)
        self.log.info(
            "family_collected",
            since=since,
            sources=len(self.adapters),
            count=len(unique),
            duplicates=len(collected) - len(unique),
        )
        return unique

    async def _collect_adapter(self, adapter: BaseAdapter, since: int) -> list[Tick]:
        page = await adapter.collect(since)
        ticks = list(page)

        limit = adapter.page_limit
        if limit is None:
            return ticks

        horizon = self.clock.time() - self.safety_interval
        cursor = since
        pages = 1

        # A full page older than the horizon means more history is waiting.
        while len(page) == limit and page[-1].time < horizon:
            next_cursor = page[-1].time
            if next_cursor <= cursor:
                self.log.warning(
                    "backfill_stalled", source=adapter.name, cursor=cursor, pages=pages
                )
                break
            cursor = next_cursor
            page = await adapter.collect(cursor)
            ticks.extend(page)
            pages += 1

        if pages > 1:
            self.log.info(
                "backfill_completed",
                source=adapter.name,
                pages=pages,
                count=len(ticks),
                last_time=ticks[-1].time if ticks else None,
            )
        return ticks

    @staticmethod
    def _union(ticks: list[Tick]) -> list[Tick]:
        seen: dict[tuple[int, str], Tick] = {}
        for tick in ticks:
            seen.setdefault(tick.natural_key, tick)
        return list(seen.values())
