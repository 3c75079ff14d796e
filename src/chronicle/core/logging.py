"""
Chronicle Logging - structured logging for the versioning core.

The core logs through structlog at debug level only: every replay, rollback
and diff emits one event with structured key/values, so a host that turns
on DEBUG can follow how a snapshot was derived. Nothing is emitted until
structlog is configured. Failures are never logged here; they propagate to
the caller.

Architecture:
    ::

        configure_logging(level="DEBUG", json_format=False, service="chronicle")
            │
            ▼
        structlog processor chain:
          1. TimeStamper (iso)
          2. add_log_level (logger name bound by get_logger)
          3. add_service_metadata
          4. JSONRenderer (or ConsoleRenderer for dev)

Examples:
    >>> from chronicle.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", service="inventory")
    >>> logger = get_logger(__name__)
    >>> logger.debug("transformations_replayed", count=2, version=3)

Tags:
    logging, structlog, observability, chronicle
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Store service name for metadata
_SERVICE_NAME = "chronicle"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "chronicle",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``).

    The name is bound as the ``logger_name`` key on every event. The
    returned proxy resolves the configuration on each call, so a later
    ``configure_logging`` reaches loggers created at import time.
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()


def logging_configured() -> bool:
    """Whether structlog has been configured, by us or by the host.

    The engines stay silent until then: structlog's defaults print every
    level to stdout.
    """
    return structlog.is_configured()


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs.

    Example:
        bind_context(value_type="Person")
        logger.debug("value_rolled_back")  # Includes value_type
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(value_type="Person", operation="replay"):
            replay(person, missing)
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> "LogContext":
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
    "logging_configured",
]
