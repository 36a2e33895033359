"""
Shared test doubles: HTTP client with canned payloads, settable clock,
an in-memory stand-in for the database adapter, and scriptable adapters.
"""

import re
from collections import defaultdict, deque
from collections.abc import Callable
from typing import Any

from extdata.infrastructure.ports import IClock
from extdata.ingestion.exceptions import DuplicateKeyError
from extdata.ingestion.ports.http import HttpResponse
from extdata.shared.models import ExchangeTick, PowTick, RecordFamily

# 2019-01-01T00:00:00Z
T0 = 1546300800
HALF_HOUR = 1800


class FakeHttpClient:
    """Returns queued bodies per URL; exceptions in the queue are raised."""

    def __init__(self, responses: dict[str, Any] | None = None):
        self._queues: dict[str, deque] = defaultdict(deque)
        self.calls: list[tuple[str, dict | None]] = []
        for url, body in (responses or {}).items():
            self.queue(url, body)

    def queue(self, url: str, *bodies: Any) -> None:
        self._queues[url].extend(bodies)

    async def get_json(self, url, params=None, timeout=None) -> HttpResponse:
        self.calls.append((url, params))
        queue = self._queues[url]
        body = queue.popleft() if len(queue) > 1 else queue[0]
        if isinstance(body, Exception):
            raise body
        return HttpResponse(status_code=200, body=body, url=url)

    async def close(self) -> None:
        pass


class FakeClock(IClock):
    def __init__(self, now: int = T0):
        self.now = now

    def time(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


_TABLE_RE = re.compile(r"(?:EXISTS|INSERT INTO|FROM)\s+(\w+)")

# Column positions of the natural key in each insert statement.
_KEY_POSITIONS = {"exchange_data": (4, 5), "pow_stats": (0, 7)}
_TIME_POSITION = {"exchange_data": 4, "pow_stats": 0}


class InMemoryDatabase:
    """Implements the slice of IDatabaseAdapter the repositories use."""

    def __init__(self):
        self.tables: dict[str, dict[tuple, tuple]] = {}
        self.statements: list[str] = []
        self.fail_on_insert: Callable[[tuple], Exception | None] | None = None

    def _table(self, query: str) -> str:
        match = _TABLE_RE.search(query)
        assert match, f"unrecognised statement: {query}"
        return match.group(1)

    async def execute(self, query: str, *args: Any) -> str:
        self.statements.append(query)
        table = self._table(query)
        if query.startswith("CREATE TABLE"):
            self.tables.setdefault(table, {})
            return "CREATE TABLE"
        if query.startswith("DROP TABLE"):
            self.tables.pop(table, None)
            return "DROP TABLE"
        if query.startswith("INSERT"):
            if self.fail_on_insert and (error := self.fail_on_insert(args)):
                raise error
            rows = self.tables[table]
            key = tuple(args[i] for i in _KEY_POSITIONS[table])
            if key in rows:
                raise DuplicateKeyError(f"duplicate key {key} in {table}")
            rows[key] = args
            return "INSERT 0 1"
        raise AssertionError(f"unexpected statement: {query}")

    async def fetch_val(self, query: str, *args: Any) -> Any:
        if "pg_class" in query:
            return args[0] if args[0] in self.tables else None
        table = self._table(query)
        rows = self.tables[table]
        if not rows:
            return None
        return max(row[_TIME_POSITION[table]] for row in rows.values())

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        raise NotImplementedError


class ScriptedAdapter:
    """Adapter double whose pages come from a function of `since`."""

    def __init__(
        self,
        name: str,
        pages: Callable[[int], list],
        family: RecordFamily = RecordFamily.EXCHANGE,
        page_limit: int | None = None,
    ):
        self.name = name
        self.family = family
        self.page_limit = page_limit
        self._pages = pages
        self.calls: list[int] = []

    async def collect(self, since: int) -> list:
        self.calls.append(since)
        result = self._pages(since)
        if isinstance(result, Exception):
            raise result
        return result


def exchange_tick(time: int, exchange: str = "binance", price: float = 0.01) -> ExchangeTick:
    return ExchangeTick(
        high=price * 1.1,
        low=price * 0.9,
        open=price,
        close=price,
        volume=10.0,
        time=time,
        exchange=exchange,
    )


def pow_tick(time: int, source: str = "luxor") -> PowTick:
    return PowTick(
        time=time,
        network_hashrate=1_000_000,
        pool_hashrate=12.5,
        workers=42,
        network_difficulty=3.5e9,
        coin_price="18.52",
        btc_price="0.0045",
        source=source,
    )
