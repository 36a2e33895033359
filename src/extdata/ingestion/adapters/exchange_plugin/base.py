from extdata.ingestion.adapters.base import BaseAdapter
from extdata.shared.models import RecordFamily


class ExchangeAdapterBase(BaseAdapter):
    """Base adapter for exchanges publishing DCR/BTC 30 minute candles."""

    family = RecordFamily.EXCHANGE
