from extdata.ingestion.adapters.pow_plugin.base import PowAdapterBase
from extdata.ingestion.adapters.pow_plugin.f2pool import F2poolAdapter
from extdata.ingestion.adapters.pow_plugin.luxor import LuxorAdapter

__all__ = ["PowAdapterBase", "F2poolAdapter", "LuxorAdapter"]
