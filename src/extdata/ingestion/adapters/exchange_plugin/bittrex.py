"""Bittrex v2 ticks (BTC-DCR, thirtyMin).

The endpoint ignores any start parameter and always returns its full window,
so filtering happens client side. `T` is a zone-less ISO timestamp in UTC.
"""

from typing import Any

from extdata.ingestion.adapters.exchange_plugin.base import ExchangeAdapterBase
from extdata.ingestion.adapters.mappers import (
    NAIVE_ISO_FORMAT,
    field,
    parse_utc,
    require_list,
    to_float,
)
from extdata.shared.models import ExchangeSource, ExchangeTick


class BittrexAdapter(ExchangeAdapterBase):
    name = ExchangeSource.BITTREX.value
    base_url = "https://bittrex.com/Api/v2.0/pub/market/GetTicks"

    async def fetch(self, start: int) -> Any:
        return await self._get({"marketName": "BTC-DCR", "tickInterval": "thirtyMin"})

    def normalize(self, payload: Any) -> list[ExchangeTick]:
        return [
            ExchangeTick(
                high=to_float(field(row, "H"), "H"),
                low=to_float(field(row, "L"), "L"),
                open=to_float(field(row, "O"), "O"),
                close=to_float(field(row, "C"), "C"),
                volume=to_float(field(row, "BV"), "BV"),
                time=parse_utc(field(row, "T"), NAIVE_ISO_FORMAT, "T"),
                exchange=self.name,
            )
            for row in require_list(payload, "result")
        ]
