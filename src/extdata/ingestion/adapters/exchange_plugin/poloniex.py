"""Poloniex chart data (BTC_DCR, 30 minute period).

Payload: JSON array of objects with float OHLCV members and `date` in unix
seconds. Errors come back as `{"error": "..."}` with status 200.
"""

from typing import Any

from extdata.ingestion.adapters.exchange_plugin.base import ExchangeAdapterBase
from extdata.ingestion.adapters.mappers import field, require_list, to_float, to_int
from extdata.ingestion.exceptions import DecodeError
from extdata.shared.models import ExchangeSource, ExchangeTick


class PoloniexAdapter(ExchangeAdapterBase):
    name = ExchangeSource.POLONIEX.value
    base_url = "https://poloniex.com/public"

    async def fetch(self, start: int) -> Any:
        return await self._get(
            {
                "command": "returnChartData",
                "currencyPair": "BTC_DCR",
                "start": start,
                "end": 9999999999,
                "period": self.settings.candle_period,
            }
        )

    def normalize(self, payload: Any) -> list[ExchangeTick]:
        if isinstance(payload, dict) and "error" in payload:
            raise DecodeError(f"poloniex error: {payload['error']}")

        return [
            ExchangeTick(
                high=to_float(field(row, "high"), "high"),
                low=to_float(field(row, "low"), "low"),
                open=to_float(field(row, "open"), "open"),
                close=to_float(field(row, "close"), "close"),
                volume=to_float(field(row, "volume"), "volume"),
                time=to_int(field(row, "date"), "date"),
                exchange=self.name,
            )
            for row in require_list(payload)
        ]
