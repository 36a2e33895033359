"""
CollectorService: composition root for the ingestion pipeline.

Wires configured adapters into per-family aggregators, pairs each with its
repository and hands the pipelines to the scheduler.
"""

from __future__ import annotations

import asyncio

from extdata.common.factories import AdapterFactory, default_factory
from extdata.config.state import ConfigState
from extdata.infrastructure.database.ports import IDatabaseAdapter
from extdata.infrastructure.impls import SystemClock
from extdata.infrastructure.observability import get_pipeline_logger
from extdata.infrastructure.ports import IClock
from extdata.ingestion.aggregator import FamilyAggregator
from extdata.ingestion.ports.http import IHttpClient
from extdata.orchestration import CollectionScheduler, FamilyPipeline, LoopOutcome
from extdata.shared.models import RecordFamily
from extdata.storage.repositories import REPOSITORIES, TickRepository


class CollectorService:
    """Builds and runs the collection pipelines for both record families."""

    def __init__(
        self,
        config: ConfigState,
        db: IDatabaseAdapter,
        client: IHttpClient,
        adapter_factory: AdapterFactory | None = None,
        clock: IClock | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self.config = config
        self.db = db
        self.client = client
        self.adapter_factory = adapter_factory or default_factory()
        self.clock = clock or SystemClock()
        self.cancel_event = cancel_event or asyncio.Event()
        self.repositories: dict[RecordFamily, TickRepository] = {
            family: repo_cls(db) for family, repo_cls in REPOSITORIES.items()
        }
        self.log = get_pipeline_logger("collector-service")
        self._scheduler: CollectionScheduler | None = None

    def enabled_sources(self, family: RecordFamily) -> list[str]:
        if family is RecordFamily.EXCHANGE:
            return self.config.sources.exchange
        return self.config.sources.pow

    def build_pipelines(self) -> list[FamilyPipeline]:
        settings = self.config.collector_settings()
        pipelines = []
        for family in (RecordFamily.EXCHANGE, RecordFamily.POW):
            adapters = self.adapter_factory.create_family(
                family, self.enabled_sources(family), self.client, settings
            )
            aggregator = FamilyAggregator(
                family,
                adapters,
                clock=self.clock,
                safety_interval=self.config.collector.safety_interval,
            )
            pipelines.append(
                FamilyPipeline(
                    family=family,
                    collector=aggregator,
                    store=self.repositories[family],
                )
            )
            self.log.info(
                "pipeline_built", family=family.value, sources=[a.name for a in adapters]
            )
        return pipelines

    @property
    def scheduler(self) -> CollectionScheduler:
        if self._scheduler is None:
            self._scheduler = CollectionScheduler(
                self.build_pipelines(),
                settings=self.config.scheduler_settings(),
                clock=self.clock,
                cancel_event=self.cancel_event,
            )
        return self._scheduler

    async def drop_tables(self) -> None:
        """Administrative reset of both families."""
        for repository in self.repositories.values():
            await repository.drop_table()

    async def bootstrap(self) -> None:
        await self.scheduler.bootstrap()

    async def run_loop(self) -> LoopOutcome:
        """Run the loop as a background task and wait for it to finish."""
        task = asyncio.create_task(self.scheduler.run(), name="extdata-collector")
        return await task
