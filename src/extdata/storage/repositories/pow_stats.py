"""PoW statistics repository.

Table Schema:
  pow_stats:
    - time: INT (unix seconds)
    - network_hashrate: INT
    - pool_hashrate: FLOAT
    - workers: INT
    - network_difficulty: FLOAT8
    - coin_price, btc_price: VARCHAR(25) (decimal as text)
    - source: VARCHAR(25)
    - PRIMARY KEY (time, source)
"""

from typing import Any

from extdata.shared.models import PowTick, RecordFamily
from extdata.storage.repositories.base import TickRepository


class PowStatsRepository(TickRepository[PowTick]):
    """Repository for mining-pool snapshots."""

    family = RecordFamily.POW
    create_statement = (
        "CREATE TABLE IF NOT EXISTS pow_stats ("
        "time INT, network_hashrate INT, pool_hashrate FLOAT, workers INT, "
        "network_difficulty FLOAT8, coin_price VARCHAR(25), btc_price VARCHAR(25), "
        "source VARCHAR(25), PRIMARY KEY (time, source))"
    )
    insert_statement = (
        "INSERT INTO pow_stats (time, network_hashrate, pool_hashrate, workers, "
        "network_difficulty, coin_price, btc_price, source) "
        "VALUES ($1, $2, $3, $4, $5, $6, $7, $8)"
    )

    def to_row(self, record: PowTick) -> tuple[Any, ...]:
        return (
            record.time,
            record.network_hashrate,
            record.pool_hashrate,
            record.workers,
            record.network_difficulty,
            record.coin_price,
            record.btc_price,
            record.source,
        )
