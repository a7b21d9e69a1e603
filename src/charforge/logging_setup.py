"""Structured logging configuration for charforge.

Library modules only call ``structlog.get_logger(__name__)``; an embedding
application calls :func:`configure_logging` once at startup.

Example:
    >>> from charforge.logging_setup import configure_logging
    >>> configure_logging(level="DEBUG")
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from charforge.config import get_settings


def add_app_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every entry with the application name."""
    event_dict["app"] = "charforge"
    return event_dict


def configure_logging(level: str | None = None, json_format: bool | None = None) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        level: Logging level name; defaults to the configured ``log_level``
        json_format: Render JSON lines instead of console output; defaults to
            ``log_format == "json"``
    """
    settings = get_settings()
    if level is None:
        level = settings.log_level
    if json_format is None:
        json_format = settings.log_format.lower() == "json"

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # SQLAlchemy and aiosqlite log through the standard library
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
