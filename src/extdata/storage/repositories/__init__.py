"""Repositories: cursor store and idempotent persistence per tick family."""

from extdata.shared.models import RecordFamily
from extdata.storage.repositories.base import InsertResult, TickRepository
from extdata.storage.repositories.exchange_data import ExchangeDataRepository
from extdata.storage.repositories.pow_stats import PowStatsRepository

REPOSITORIES: dict[RecordFamily, type[TickRepository]] = {
    RecordFamily.EXCHANGE: ExchangeDataRepository,
    RecordFamily.POW: PowStatsRepository,
}

__all__ = [
    "InsertResult",
    "TickRepository",
    "ExchangeDataRepository",
    "PowStatsRepository",
    "REPOSITORIES",
]
