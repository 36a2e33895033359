"""Luxor pool statistics.

Payload:
    {"globalStats": [{"time": "<RFC3339>", "network_hashrate": 1,
      "pool_hashrate": 1.0, "workers": 1, "network_difficulty": 1.0,
      "coin_price": "...", "btc_price": "..."}, ...]}
"""

from typing import Any

from extdata.ingestion.adapters.mappers import (
    field,
    parse_rfc3339,
    require_list,
    to_float,
    to_int,
    to_text,
)
from extdata.ingestion.adapters.pow_plugin.base import PowAdapterBase
from extdata.shared.models import PowSource, PowTick


class LuxorAdapter(PowAdapterBase):
    name = PowSource.LUXOR.value
    base_url = "http://mining.luxor.tech/API/DCR/stats"

    async def fetch(self, start: int) -> Any:
        return await self._get()

    def normalize(self, payload: Any) -> list[PowTick]:
        return [
            PowTick(
                time=parse_rfc3339(field(row, "time")),
                network_hashrate=to_int(field(row, "network_hashrate"), "network_hashrate"),
                pool_hashrate=to_float(field(row, "pool_hashrate"), "pool_hashrate"),
                workers=to_int(field(row, "workers"), "workers"),
                network_difficulty=to_float(
                    field(row, "network_difficulty"), "network_difficulty"
                ),
                coin_price=to_text(field(row, "coin_price"), "coin_price"),
                btc_price=to_text(field(row, "btc_price"), "btc_price"),
                source=self.name,
            )
            for row in require_list(payload, "globalStats")
        ]
