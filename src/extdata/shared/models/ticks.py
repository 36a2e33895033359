"""Canonical tick models.

Models for:
- ExchangeTick: one OHLC(V) observation from an exchange
- PowTick: one mining-pool statistics snapshot

Both are immutable once created and identified by a natural key of
(time, source). Times are unix seconds (UTC).
"""

from pydantic import BaseModel, ConfigDict, Field


class ExchangeTick(BaseModel):
    """OHLCV candle for the tracked pair on one exchange.

    Stored in: exchange_data (volume is carried but not persisted)
    """

    model_config = ConfigDict(frozen=True)

    high: float
    low: float
    open: float
    close: float
    volume: float = 0.0
    time: int = Field(..., description="Candle open time (unix seconds)")
    exchange: str = Field(..., min_length=1, max_length=25)

    @property
    def natural_key(self) -> tuple[int, str]:
        return (self.time, self.exchange)


class PowTick(BaseModel):
    """Pool/network statistics snapshot.

    Stored in: pow_stats
    """

    model_config = ConfigDict(frozen=True)

    time: int = Field(..., description="Snapshot time (unix seconds)")
    network_hashrate: int = 0
    pool_hashrate: float = 0.0
    workers: int = 0
    network_difficulty: float = 0.0
    coin_price: str = Field(default="", max_length=25)
    btc_price: str = Field(default="", max_length=25)
    source: str = Field(..., min_length=1, max_length=25)

    @property
    def natural_key(self) -> tuple[int, str]:
        return (self.time, self.source)


Tick = ExchangeTick | PowTick
