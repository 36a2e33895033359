from extdata.config.state import (
    CollectorConfig,
    ConfigLoader,
    ConfigState,
    DatabaseConfig,
    LoggingConfig,
    SourcesConfig,
    get_config,
)

__all__ = [
    "CollectorConfig",
    "ConfigLoader",
    "ConfigState",
    "DatabaseConfig",
    "LoggingConfig",
    "SourcesConfig",
    "get_config",
]
