"""
Shared enumerations for extdata.

Separates record families (WHAT is stored) from sources (WHERE it comes from).
"""

import enum


class RecordFamily(str, enum.Enum):
    """Logical record kinds, each collected and persisted independently."""

    EXCHANGE = "exchange"
    POW = "pow"

    @property
    def table(self) -> str:
        return _FAMILY_TABLES[self]


_FAMILY_TABLES = {
    RecordFamily.EXCHANGE: "exchange_data",
    RecordFamily.POW: "pow_stats",
}


class ExchangeSource(str, enum.Enum):
    """Exchanges providing DCR/BTC candles."""

    POLONIEX = "poloniex"
    BITTREX = "bittrex"
    BLEUTRADE = "bleutrade"
    BINANCE = "binance"


class PowSource(str, enum.Enum):
    """Mining pools providing network/pool statistics."""

    LUXOR = "luxor"
    F2POOL = "f2pool"
