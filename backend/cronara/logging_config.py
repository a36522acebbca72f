"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, Optional

import orjson
import structlog
from structlog.types import Processor

from cronara.config import Settings, get_settings


def _orjson_serializer(obj: Any, **kwargs: Any) -> str:
    """Serialize a log event to JSON using orjson."""
    return orjson.dumps(obj, default=str).decode("utf-8")


def use_json_logs(settings: Settings) -> bool:
    """JSON output unless running in development or explicitly set to console."""
    log_format = settings.LOG_FORMAT.lower() if settings.LOG_FORMAT else None
    if log_format is not None:
        return log_format == "json"
    return settings.ENVIRONMENT != "development"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog for the application.

    Development: colored ConsoleRenderer.
    Everything else: JSONRenderer with a `message` key for log shippers.
    """
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json_logs(settings):
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.EventRenamer("message"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(serializer=_orjson_serializer),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
    )
