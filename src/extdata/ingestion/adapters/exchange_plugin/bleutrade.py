"""Bleutrade candles (DCR_BTC, 30m).

No start parameter exists; the call asks for as many candles as the API will
give. Every numeric member is a string and `TimeStamp` is
`YYYY-MM-DD HH:MM:SS` in UTC.
"""

from typing import Any

from extdata.ingestion.adapters.exchange_plugin.base import ExchangeAdapterBase
from extdata.ingestion.adapters.mappers import (
    SPACE_DATETIME_FORMAT,
    field,
    parse_utc,
    require_list,
    to_float,
)
from extdata.shared.models import ExchangeSource, ExchangeTick


class BleutradeAdapter(ExchangeAdapterBase):
    name = ExchangeSource.BLEUTRADE.value
    base_url = "https://bleutrade.com/api/v2/public/getcandles"

    async def fetch(self, start: int) -> Any:
        return await self._get({"market": "DCR_BTC", "count": 999999, "period": "30m"})

    def normalize(self, payload: Any) -> list[ExchangeTick]:
        return [
            ExchangeTick(
                high=to_float(field(row, "high"), "high"),
                low=to_float(field(row, "low"), "low"),
                open=to_float(field(row, "open"), "open"),
                close=to_float(field(row, "close"), "close"),
                volume=to_float(field(row, "volume"), "volume"),
                time=parse_utc(field(row, "TimeStamp"), SPACE_DATETIME_FORMAT, "TimeStamp"),
                exchange=self.name,
            )
            for row in require_list(payload, "result")
        ]
