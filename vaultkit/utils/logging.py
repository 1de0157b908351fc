"""Structured logging configuration using structlog."""

import logging
import sys
import time
from typing import Any

import structlog
from structlog.types import EventDict

from ..config.settings import settings


def add_timestamp(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add timestamp to log records."""
    event_dict["timestamp"] = time.time()
    return event_dict


def setup_logging(log_level: str | None = None, structured: bool | None = None) -> None:
    """Configure structured logging for vaultkit."""

    level = log_level or settings.log_level
    if structured is None:
        structured = settings.structured_logging

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        add_timestamp,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if structured:
        processors.extend([
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer()
        ])
    else:
        processors.extend([
            structlog.dev.ConsoleRenderer(colors=True)
        ])

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
