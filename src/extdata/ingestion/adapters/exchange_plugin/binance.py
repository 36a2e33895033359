"""Binance klines (DCRBTC, 30m).

Pages are capped at `binance_limit` rows starting at `startTime` (ms), so a
full history needs repeated calls; the aggregator drives that loop using
page_limit. Rows are arrays:

    [open_time_ms, open, high, low, close, volume, close_time_ms, ...]

with prices and volume as numeric strings.
"""

from typing import Any

from extdata.ingestion.adapters.exchange_plugin.base import ExchangeAdapterBase
from extdata.ingestion.adapters.mappers import (
    field,
    require_list,
    to_float,
    unix_ms_to_seconds,
)
from extdata.shared.models import ExchangeSource, ExchangeTick


class BinanceAdapter(ExchangeAdapterBase):
    name = ExchangeSource.BINANCE.value
    base_url = "https://api.binance.com/api/v1/klines"

    @property
    def page_limit(self) -> int:
        return self.settings.binance_limit

    async def fetch(self, start: int) -> Any:
        return await self._get(
            {
                "symbol": "DCRBTC",
                "interval": "30m",
                "limit": self.page_limit,
                "startTime": start * 1000,
            }
        )

    def normalize(self, payload: Any) -> list[ExchangeTick]:
        return [
            ExchangeTick(
                open=to_float(field(row, 1), "open"),
                high=to_float(field(row, 2), "high"),
                low=to_float(field(row, 3), "low"),
                close=to_float(field(row, 4), "close"),
                volume=to_float(field(row, 5), "volume"),
                time=unix_ms_to_seconds(field(row, 0), "open_time"),
                exchange=self.name,
            )
            for row in require_list(payload)
        ]
