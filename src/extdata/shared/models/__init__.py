"""Shared domain models."""

from extdata.shared.models.enums import ExchangeSource, PowSource, RecordFamily
from extdata.shared.models.ticks import ExchangeTick, PowTick, Tick

__all__ = [
    # Enums
    "RecordFamily",
    "ExchangeSource",
    "PowSource",
    # Models
    "ExchangeTick",
    "PowTick",
    "Tick",
]
