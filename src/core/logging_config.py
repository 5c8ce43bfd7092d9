"""Structured logging setup (structlog).

Outputs structured logs to stdout:
- Development: human-readable console renderer with colors
- LOG_JSON=true: JSON renderer for log shippers

Request context (trace_id) is bound through structlog contextvars by
TraceMiddleware and merged into every event.

Usage:
    import structlog

    logger = structlog.get_logger(__name__)
    logger.info("user_provisioned", web_id=web_id)
"""

from __future__ import annotations

import logging
import sys

import structlog

from src.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog once for the process.

    Args:
        settings: Application settings (log level, renderer choice).
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.log_json:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=settings.is_development))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
