"""Source adapters, one per external data source."""

from extdata.ingestion.adapters.base import BaseAdapter

__all__ = ["BaseAdapter"]
