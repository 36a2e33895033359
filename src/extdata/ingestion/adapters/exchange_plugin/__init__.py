from extdata.ingestion.adapters.exchange_plugin.base import ExchangeAdapterBase
from extdata.ingestion.adapters.exchange_plugin.binance import BinanceAdapter
from extdata.ingestion.adapters.exchange_plugin.bittrex import BittrexAdapter
from extdata.ingestion.adapters.exchange_plugin.bleutrade import BleutradeAdapter
from extdata.ingestion.adapters.exchange_plugin.poloniex import PoloniexAdapter

__all__ = [
    "ExchangeAdapterBase",
    "BinanceAdapter",
    "BittrexAdapter",
    "BleutradeAdapter",
    "PoloniexAdapter",
]
