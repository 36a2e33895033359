"""Configuration value objects for dependency injection.

Instead of injecting the global settings object, inject specific configuration
dataclasses into each component. Enables:
- Easy testing with different configurations
- Clear constructor contracts
- Validation at composition root
"""

from dataclasses import dataclass

# DCR mainnet launch, the earliest point any source can have data for.
DCR_LAUNCH_TIME = 1454889600


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 300.0
    verify_ssl: bool = True


@dataclass(frozen=True)
class CollectorSettings:
    """Immutable settings shared by every source adapter."""

    epoch: int = DCR_LAUNCH_TIME
    binance_limit: int = 1000
    candle_period: int = 1800

    def start_bound(self, since: int) -> int:
        """Lower time bound for a collection; 0 means full history."""
        return since if since > 0 else self.epoch


@dataclass(frozen=True)
class SchedulerSettings:
    """Cadence of the incremental loop (seconds)."""

    poll_interval: int = 1800
    poll_lead: int = 30
