"""Structured logging for the API process.

structlog renders JSON lines outside development and coloured key/value output
in a development terminal. Provider and repository modules log through the
standard library; those records share the same stream and level.
"""
import logging
import sys

import structlog

# Transport libraries that log every outbound request at INFO.
CHATTY_LOGGERS = ("httpx", "httpcore", "hpack")


def _processors(json_logs: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        renderer,
    ]


def configure_structured_logging(log_level: str = "INFO", json_logs: bool = True) -> int:
    """Configure logging for the application.

    Outbound-request chatter from the HTTP transport stack is held at WARNING
    unless ``log_level`` is DEBUG.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render JSON lines when True, console output otherwise

    Returns:
        The numeric level that was applied
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)
    transport_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)

    structlog.configure(
        processors=_processors(json_logs),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return level


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger bound to ``name``."""
    return structlog.get_logger(name)
