"""Base repository for one tick family.

Each family lives in its own table keyed by (time, source). The repository is
both the cursor store (exists / latest_time) and the persistence layer
(create_table / insert_many / drop_table).
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from extdata.infrastructure.database.ports import IDatabaseAdapter
from extdata.infrastructure.observability import get_storage_logger
from extdata.ingestion.exceptions import DuplicateKeyError, NotFoundError
from extdata.shared.models import RecordFamily

T = TypeVar("T")

TABLE_EXISTS_QUERY = "SELECT relname FROM pg_class WHERE relname = $1"


@dataclass(frozen=True)
class InsertResult:
    """Outcome of a batch insert."""

    inserted: int
    duplicates: int

    @property
    def total(self) -> int:
        return self.inserted + self.duplicates


class TickRepository(ABC, Generic[T]):
    """
    Repository for a tick table.

    Subclasses provide the table DDL, the insert statement and the mapping of
    a tick to its positional parameters.
    """

    family: ClassVar[RecordFamily]
    create_statement: ClassVar[str]
    insert_statement: ClassVar[str]

    def __init__(self, db: IDatabaseAdapter):
        """Initialize repository.

        Args:
            db: Database adapter used for SQL execution
        """
        self.db = db
        self.log = get_storage_logger("repository", table=self.table)

    @property
    def table(self) -> str:
        return self.family.table

    @abstractmethod
    def to_row(self, record: T) -> tuple[Any, ...]:
        """Positional parameters for insert_statement."""
        ...

    async def exists(self) -> bool:
        """Whether the family's table has been created."""
        name = await self.db.fetch_val(TABLE_EXISTS_QUERY, self.table)
        return name is not None

    async def create_table(self) -> None:
        await self.db.execute(self.create_statement)
        self.log.info("table_created")

    async def drop_table(self) -> None:
        """Administrative reset: drop the whole family."""
        await self.db.execute(f"DROP TABLE IF EXISTS {self.table}")
        self.log.info("table_dropped")

    async def latest_time(self) -> int:
        """
        Time of the newest stored record.

        Raises:
            NotFoundError: If the table holds no rows
        """
        value = await self.db.fetch_val(
            f"SELECT time FROM {self.table} ORDER BY time DESC LIMIT 1"
        )
        if value is None:
            raise NotFoundError(f"No rows in {self.table}")
        return int(value)

    async def insert_many(self, records: Sequence[T]) -> InsertResult:
        """
        Insert records one by one, skipping natural-key duplicates.

        Duplicates are counted, not raised. Any other failure aborts the
        remainder of the batch and propagates; rows already inserted stay,
        which is safe because re-collecting them later only yields duplicates.

        Returns:
            InsertResult with inserted and duplicate counts
        """
        inserted = 0
        duplicates = 0
        for record in records:
            try:
                await self.db.execute(self.insert_statement, *self.to_row(record))
            except DuplicateKeyError:
                duplicates += 1
                continue
            inserted += 1

        self.log.debug("batch_inserted", inserted=inserted, duplicates=duplicates)
        return InsertResult(inserted=inserted, duplicates=duplicates)
