"""
Structured logging infrastructure for extdata.
Provides consistent, machine-readable logs across the collector.

Log Structure:
    {
        "app": "extdata",              # Application identifier
        "layer": "ingestion",          # Architectural layer
        "component": "binance",        # Specific component/adapter
        "family": "exchange",          # Domain context
        "event": "page_collected",     # What happened
        ...
    }

Architectural Layers:
    - infrastructure: Cross-cutting (database, config)
    - ingestion: Data acquisition (source adapters, aggregator)
    - pipeline: Scheduler (bootstrap and the collection loop)
    - storage: Cursor store and persistence
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

Layer = Literal["infrastructure", "ingestion", "pipeline", "storage"]


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the application identifier to every log entry."""
    event_dict["app"] = "extdata"
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add severity level for cloud logging compatibility.
    Maps Python log levels to standard severity levels.
    """
    level = event_dict.get("level")
    if level:
        severity_map = {
            "debug": "DEBUG",
            "info": "INFO",
            "warning": "WARNING",
            "error": "ERROR",
            "critical": "CRITICAL",
        }
        event_dict["severity"] = severity_map.get(level, "INFO")
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from extdata.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.root.setLevel(log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(
            0, structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=True)
        )

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with architectural context.

    The context is bound lazily, so module-level loggers pick up the
    configuration applied later by setup_logging().

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer (infrastructure, ingestion, pipeline, storage)
        component: Specific component/service within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Usage:
        >>> log = get_logger(__name__, layer="ingestion", component="binance")
        >>> log.info("page_collected", rows=1000)
    """
    context = {}

    if layer:
        context["layer"] = layer

    if component:
        context["component"] = component

    context.update(initial_context)

    if name:
        return structlog.get_logger(name, **context)
    return structlog.get_logger(**context)


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def get_infrastructure_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for infrastructure layer (database, config).

    Usage:
        >>> log = get_infrastructure_logger("database-adapter")
        >>> log.info("pool_created", max_size=5)
    """
    return get_logger(
        "infrastructure",
        layer="infrastructure",
        component=component,
        **context,
    )


def get_ingestion_logger(
    component: str,
    source: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for ingestion layer (data acquisition).

    Args:
        component: Component name (e.g., "adapter", "aggregator", "http-client")
        source: Source name (e.g., "binance", "luxor") - optional
        **context: Additional context (family, since, etc.)

    Usage:
        >>> log = get_ingestion_logger("adapter", source="binance")
        >>> log.info("page_collected", rows=1000)
    """
    ctx = {}
    if source:
        ctx["source"] = source
    ctx.update(context)

    return get_logger(
        "ingestion",
        layer="ingestion",
        component=component,
        **ctx,
    )


def get_pipeline_logger(
    component: str = "scheduler",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the pipeline layer (bootstrap and collection loop).

    Usage:
        >>> log = get_pipeline_logger(family="pow")
        >>> log.info("cycle_started")
    """
    return get_logger(
        "pipeline",
        layer="pipeline",
        component=component,
        **context,
    )


def get_storage_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for storage layer (repositories).

    Usage:
        >>> log = get_storage_logger("repository", table="exchange_data")
        >>> log.info("batch_inserted", inserted=1000, duplicates=0)
    """
    return get_logger(
        "storage",
        layer="storage",
        component=component,
        **context,
    )


# Alias for database logging
def get_database_logger(**context: Any) -> structlog.stdlib.BoundLogger:
    """
    Convenience alias for database logging (maps to infrastructure layer).
    """
    return get_infrastructure_logger("database-adapter", **context)
