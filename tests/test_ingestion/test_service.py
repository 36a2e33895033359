"""
Tests for CollectorService wiring and the adapter factory.
"""

import pytest

from extdata.common.factories import AdapterFactory, default_factory
from extdata.config.state import ConfigState
from extdata.ingestion.adapters.exchange_plugin import BinanceAdapter, BleutradeAdapter
from extdata.ingestion.adapters.pow_plugin import F2poolAdapter, LuxorAdapter
from extdata.ingestion.service import CollectorService
from extdata.shared.models import RecordFamily
from tests.fixtures import T0, FakeClock, FakeHttpClient, InMemoryDatabase


def source_payloads() -> FakeHttpClient:
    return FakeHttpClient(
        {
            BleutradeAdapter.base_url: {
                "success": "true",
                "result": [
                    {
                        "TimeStamp": "2019-01-01 00:00:00",
                        "open": "0.0102",
                        "high": "0.0110",
                        "low": "0.0100",
                        "close": "0.0105",
                        "volume": "12.5",
                    }
                ],
            },
            BinanceAdapter.base_url: [
                [T0 * 1000, "0.0102", "0.0110", "0.0100", "0.0105", "812.33", 0, "8.4", 57]
            ],
            LuxorAdapter.base_url: {
                "globalStats": [
                    {
                        "time": "2019-01-01T00:00:00Z",
                        "network_hashrate": 1000,
                        "pool_hashrate": 12.5,
                        "workers": 4,
                        "network_difficulty": 3.5e9,
                        "coin_price": "18.52",
                        "btc_price": None,
                    }
                ]
            },
            F2poolAdapter.base_url: {"hashrate": {"2019-01-01T00:30:00Z": 1.5e15}},
        }
    )


class TestAdapterFactory:
    def test_default_factory_knows_every_source(self):
        assert set(default_factory().available_sources()) == {
            "poloniex",
            "bittrex",
            "bleutrade",
            "binance",
            "luxor",
            "f2pool",
        }

    def test_unknown_source(self):
        with pytest.raises(ValueError, match="kraken"):
            default_factory().create("kraken", FakeHttpClient())

    def test_create_family_rejects_wrong_family(self):
        with pytest.raises(ValueError, match="luxor"):
            default_factory().create_family(
                RecordFamily.EXCHANGE, ["binance", "luxor"], FakeHttpClient()
            )

    def test_custom_registration(self):
        factory = AdapterFactory()
        factory.register("bleutrade", BleutradeAdapter)

        adapter = factory.create("bleutrade", FakeHttpClient())

        assert isinstance(adapter, BleutradeAdapter)
        assert factory.available_sources() == ["bleutrade"]


class TestCollectorService:
    def test_builds_one_pipeline_per_family(self):
        config = ConfigState()
        service = CollectorService(config, InMemoryDatabase(), FakeHttpClient())

        pipelines = service.build_pipelines()

        assert [p.family for p in pipelines] == [RecordFamily.EXCHANGE, RecordFamily.POW]
        exchange_sources = [a.name for a in pipelines[0].collector.adapters]
        assert exchange_sources == ["bleutrade", "binance"]
        assert pipelines[1].store.table == "pow_stats"

    def test_safety_interval_reaches_aggregators(self):
        config = ConfigState(collector={"safety_interval": 7200})
        service = CollectorService(config, InMemoryDatabase(), FakeHttpClient())

        pipelines = service.build_pipelines()

        assert [p.collector.safety_interval for p in pipelines] == [7200, 7200]

    def test_unknown_configured_source_fails(self):
        config = ConfigState(sources={"exchange": ["kraken"]})
        service = CollectorService(config, InMemoryDatabase(), FakeHttpClient())

        with pytest.raises(ValueError):
            service.build_pipelines()

    @pytest.mark.asyncio
    async def test_bootstrap_fills_both_tables(self):
        db = InMemoryDatabase()
        service = CollectorService(
            ConfigState(), db, source_payloads(), clock=FakeClock(T0 + 86400)
        )

        await service.bootstrap()

        assert set(db.tables["exchange_data"]) == {(T0, "bleutrade"), (T0, "binance")}
        assert set(db.tables["pow_stats"]) == {(T0, "luxor"), (T0 + 1800, "f2pool")}
        assert service.scheduler.watermarks == {
            RecordFamily.EXCHANGE: T0,
            RecordFamily.POW: T0 + 1800,
        }

    @pytest.mark.asyncio
    async def test_drop_tables(self):
        db = InMemoryDatabase()
        service = CollectorService(ConfigState(), db, source_payloads(), clock=FakeClock(T0))
        await service.bootstrap()

        await service.drop_tables()

        assert db.tables == {}
