"""
Database adapter interfaces and implementations.
Provides abstraction over database operations for dependency injection.
"""

from contextlib import asynccontextmanager
from typing import Any, Protocol

import asyncpg

from extdata.infrastructure.observability import get_database_logger
from extdata.ingestion.exceptions import ConnectivityError, DuplicateKeyError

log = get_database_logger()

# Failures meaning the server cannot be reached or the session is gone.
_CONNECTIVITY_ERRORS = (
    OSError,
    asyncpg.PostgresConnectionError,
    asyncpg.InterfaceError,
    asyncpg.CannotConnectNowError,
)

# Server reachable but the session is refused: bad credentials or database.
_STARTUP_ERRORS = (
    asyncpg.InvalidAuthorizationSpecificationError,
    asyncpg.InvalidCatalogNameError,
)


class IDatabaseAdapter(Protocol):
    """
    Protocol defining database operations interface.
    Enables dependency injection and testing with different implementations.
    """

    async def connect(self) -> None:
        """Establish database connection pool."""
        ...

    async def disconnect(self) -> None:
        """Close database connection pool."""
        ...

    async def ping(self) -> None:
        """Round-trip a trivial query; raises ConnectivityError on failure."""
        ...

    async def execute(self, query: str, *args: Any) -> str:
        """
        Execute a statement.

        Raises:
            DuplicateKeyError: If a unique/primary key constraint is violated
            ConnectivityError: If the database is unreachable
        """
        ...

    async def fetch_val(self, query: str, *args: Any) -> Any | None:
        """Fetch the first column of the first row, or None."""
        ...

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Fetch all rows as list of dictionaries."""
        ...


class DatabaseAdapter:
    """
    Concrete implementation backed by an asyncpg connection pool.

    Translates driver exceptions into the extdata error taxonomy by their
    structured kind (SQLSTATE class), never by message text.
    """

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: str,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 60.0,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_config(cls, config: Any) -> "DatabaseAdapter":
        """Build from a DatabaseConfig model."""
        return cls(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.name,
            min_size=config.pool_min_size,
            max_size=config.pool_max_size,
            command_timeout=config.command_timeout,
        )

    async def connect(self) -> None:
        """Establish database connection pool (idempotent)."""
        if self._pool is not None:
            return
        try:
            self._pool = await asyncpg.create_pool(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                min_size=self.min_size,
                max_size=self.max_size,
                command_timeout=self.command_timeout,
            )
        except _CONNECTIVITY_ERRORS + _STARTUP_ERRORS as e:
            raise ConnectivityError(
                f"Cannot connect to postgres at {self.host}:{self.port}/{self.database}: {e}"
            ) from e
        log.info(
            "pool_created",
            host=self.host,
            port=self.port,
            database=self.database,
            max_size=self.max_size,
        )

    async def disconnect(self) -> None:
        """Close database connection pool."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            log.info("pool_closed")

    @asynccontextmanager
    async def _connection(self):
        if self._pool is None:
            raise RuntimeError("Database not connected")
        try:
            async with self._pool.acquire() as conn:
                yield conn
        except asyncpg.UniqueViolationError as e:
            raise DuplicateKeyError(str(e)) from e
        except _CONNECTIVITY_ERRORS as e:
            raise ConnectivityError(f"Database unavailable: {e}") from e

    async def ping(self) -> None:
        async with self._connection() as conn:
            await conn.fetchval("SELECT 1")

    async def execute(self, query: str, *args: Any) -> str:
        """Execute a statement and return the status tag."""
        async with self._connection() as conn:
            return await conn.execute(query, *args)

    async def fetch_val(self, query: str, *args: Any) -> Any | None:
        """Fetch the first column of the first row, or None."""
        async with self._connection() as conn:
            return await conn.fetchval(query, *args)

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Fetch all rows as list of dictionaries."""
        async with self._connection() as conn:
            rows = await conn.fetch(query, *args)
            return [dict(row) for row in rows]

    @property
    def pool(self) -> asyncpg.Pool | None:
        """Access underlying connection pool."""
        return self._pool
