"""F2pool Decred statistics.

Only the pool hashrate history is published, as an object keyed by RFC3339
time. The remaining PowTick fields stay at their empty defaults.
"""

from typing import Any

from extdata.ingestion.adapters.mappers import (
    parse_rfc3339,
    require_mapping,
    to_float,
)
from extdata.ingestion.adapters.pow_plugin.base import PowAdapterBase
from extdata.shared.models import PowSource, PowTick


class F2poolAdapter(PowAdapterBase):
    name = PowSource.F2POOL.value
    base_url = "https://api.f2pool.com/decred/"

    async def fetch(self, start: int) -> Any:
        return await self._get()

    def normalize(self, payload: Any) -> list[PowTick]:
        return [
            PowTick(
                time=parse_rfc3339(stamp, "hashrate"),
                pool_hashrate=to_float(value, "hashrate"),
                source=self.name,
            )
            for stamp, value in require_mapping(payload, "hashrate").items()
        ]
