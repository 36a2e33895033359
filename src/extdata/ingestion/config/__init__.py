from extdata.ingestion.config.value_objects import (
    DCR_LAUNCH_TIME,
    CollectorSettings,
    HttpClientConfig,
    SchedulerSettings,
)

__all__ = [
    "DCR_LAUNCH_TIME",
    "CollectorSettings",
    "HttpClientConfig",
    "SchedulerSettings",
]
