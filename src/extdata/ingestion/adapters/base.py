"""
Base source adapter.

Every external source is integrated through one adapter that fetches the raw
payload, normalizes it into canonical ticks and tracks the newest timestamp it
has handed out. Adapters never retry; failures surface as typed errors.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import ValidationError

from extdata.infrastructure.observability import get_ingestion_logger
from extdata.ingestion.config.value_objects import CollectorSettings
from extdata.ingestion.exceptions import ConversionError, ExtDataError
from extdata.ingestion.ports.http import IHttpClient
from extdata.shared.models import RecordFamily, Tick


class BaseAdapter(ABC):
    """
    Template for a single-source collector.

    Subclasses declare:
        name: Source identifier written to the exchange/source column
        family: Record family the adapter produces
        base_url: Endpoint queried by fetch()
        page_limit: Rows per response when the source caps page size,
            None when a single call returns everything it has

    and implement fetch() (raw JSON for a start bound) and normalize()
    (raw JSON -> ticks). collect() applies the shared rules: start-bound
    substitution, time filtering, ordering and last-update tracking.
    """

    name: ClassVar[str]
    family: ClassVar[RecordFamily]
    base_url: ClassVar[str]

    def __init__(
        self,
        client: IHttpClient,
        settings: CollectorSettings | None = None,
        last_update: int = 0,
    ):
        """Initialize adapter.

        Args:
            client: Shared HTTP client
            settings: Immutable collector settings (epoch, page sizes)
            last_update: Newest time already known for this source
        """
        self.client = client
        self.settings = settings or CollectorSettings()
        self._last_update = last_update
        self.log = get_ingestion_logger("adapter", source=self.name)

    @property
    def page_limit(self) -> int | None:
        """Page size cap, or None for unbounded sources."""
        return None

    @property
    def last_update(self) -> int:
        """Newest tick time returned so far."""
        return self._last_update

    async def collect(self, since: int) -> list[Tick]:
        """Collect ticks with time >= since.

        Args:
            since: Unix seconds lower bound; 0 collects full history
                starting at the configured epoch

        Returns:
            Ticks sorted by time ascending

        Raises:
            ConnectivityError: Source unreachable
            DecodeError: Payload malformed
            ConversionError: A field could not be converted
        """
        start = self.settings.start_bound(since)
        try:
            payload = await self.fetch(start)
            ticks = self.normalize(payload)
        except ExtDataError as e:
            e.source = e.source or self.name
            raise
        except ValidationError as e:
            raise ConversionError(
                f"{self.name}: normalized tick failed validation: {e}",
                source=self.name,
            ) from e

        ticks = sorted((t for t in ticks if t.time >= start), key=lambda t: t.time)
        if ticks:
            self._last_update = max(self._last_update, ticks[-1].time)

        self.log.debug("ticks_collected", since=since, start=start, count=len(ticks))
        return ticks

    @abstractmethod
    async def fetch(self, start: int) -> Any:
        """Request the raw JSON payload for data at or after start."""
        ...

    @abstractmethod
    def normalize(self, payload: Any) -> list[Tick]:
        """Convert the raw payload into canonical ticks."""
        ...

    async def _get(self, params: dict[str, Any] | None = None) -> Any:
        response = await self.client.get_json(self.base_url, params=params)
        return response.body

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name={self.name}, "
            f"family={self.family.value}, "
            f"page_limit={self.page_limit}, "
            f"last_update={self._last_update})"
        )
