"""Structured logging configuration."""

import logging
import re
import sys

import structlog

from src.core.config import settings

_SENSITIVE_KEYS = re.compile(r"(secret|signature|token|password|key)", re.IGNORECASE)


def redact_sensitive(logger, method_name: str, event_dict: dict) -> dict:
    """Mask values stored under secret-bearing keys."""
    for key in list(event_dict.keys()):
        if key != "event" and _SENSITIVE_KEYS.search(key):
            event_dict[key] = "***"
    return event_dict


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Uses JSON output unless ``log_format`` is ``console``.
    """
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    fmt = (log_format or settings.log_format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
