from extdata.ingestion.adapters.base import BaseAdapter
from extdata.shared.models import RecordFamily


class PowAdapterBase(BaseAdapter):
    """Base adapter for mining pools.

    Pools expose a single snapshot call with whatever history they keep;
    the start bound is only applied client side.
    """

    family = RecordFamily.POW
