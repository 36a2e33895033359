"""
Adapter Factory
===============

Creates source adapters by name from a registry of constructors.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from extdata.ingestion.adapters.base import BaseAdapter
from extdata.ingestion.adapters.exchange_plugin import (
    BinanceAdapter,
    BittrexAdapter,
    BleutradeAdapter,
    PoloniexAdapter,
)
from extdata.ingestion.adapters.pow_plugin import F2poolAdapter, LuxorAdapter
from extdata.shared.models import RecordFamily

AdapterBuilder = Callable[..., BaseAdapter]


class AdapterFactory:
    """Registry-driven factory for adapters."""

    def __init__(self) -> None:
        self._registry: dict[str, type[BaseAdapter] | AdapterBuilder] = {}

    def register(self, name: str, builder: type[BaseAdapter] | AdapterBuilder) -> None:
        self._registry[name] = builder

    def create(self, name: str, *args: Any, **kwargs: Any) -> BaseAdapter:
        if name not in self._registry:
            raise ValueError(f"No adapter registered for source {name!r}")
        return self._registry[name](*args, **kwargs)

    def create_family(
        self,
        family: RecordFamily,
        names: Iterable[str],
        *args: Any,
        **kwargs: Any,
    ) -> list[BaseAdapter]:
        """Create the enabled adapters of one family, in the given order."""
        adapters = []
        for name in names:
            adapter = self.create(name, *args, **kwargs)
            if adapter.family != family:
                raise ValueError(
                    f"Source {name!r} produces {adapter.family.value} records, "
                    f"not {family.value}"
                )
            adapters.append(adapter)
        return adapters

    def available_sources(self) -> list[str]:
        return list(self._registry.keys())


def default_factory() -> AdapterFactory:
    """Factory with every built-in source registered."""
    factory = AdapterFactory()
    for adapter_cls in (
        PoloniexAdapter,
        BittrexAdapter,
        BleutradeAdapter,
        BinanceAdapter,
        LuxorAdapter,
        F2poolAdapter,
    ):
        factory.register(adapter_cls.name, adapter_cls)
    return factory
