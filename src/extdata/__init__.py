"""
External data collector for DCR/BTC market and mining-pool statistics.

Modules:
- ingestion: Source adapters, HTTP transport and the family aggregator
- storage: Cursor store and idempotent persistence (PostgreSQL)
- orchestration: Bootstrap and the interval-driven collection loop
- shared: Canonical tick models and enums
- infrastructure: Config, database, logging, clock
"""

__version__ = "0.1.0"
