"""Exchange data repository for OHLC candle persistence.

Table Schema:
  exchange_data:
    - high, low, open, close: FLOAT8
    - time: INT (unix seconds)
    - exchange: VARCHAR(25)
    - PRIMARY KEY (time, exchange)
"""

from typing import Any

from extdata.shared.models import ExchangeTick, RecordFamily
from extdata.storage.repositories.base import TickRepository


class ExchangeDataRepository(TickRepository[ExchangeTick]):
    """Repository for exchange candles."""

    family = RecordFamily.EXCHANGE
    create_statement = (
        "CREATE TABLE IF NOT EXISTS exchange_data ("
        "high FLOAT8, low FLOAT8, open FLOAT8, close FLOAT8, "
        "time INT, exchange VARCHAR(25), "
        "CONSTRAINT tick PRIMARY KEY (time, exchange))"
    )
    insert_statement = (
        "INSERT INTO exchange_data (high, low, open, close, time, exchange) "
        "VALUES ($1, $2, $3, $4, $5, $6)"
    )

    def to_row(self, record: ExchangeTick) -> tuple[Any, ...]:
        return (
            record.high,
            record.low,
            record.open,
            record.close,
            record.time,
            record.exchange,
        )
