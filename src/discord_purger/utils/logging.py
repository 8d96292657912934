"""Logging configuration for Discord Purger.

Log records go to stderr by default; stdout belongs to the CLI's rich
tables and summary, so ``--json-logs`` output stays line-parseable.
"""

import logging
import sys
from typing import TextIO

import structlog

HANDLER_NAME = "discord_purger"


def setup_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Configure structured logging.

    Calling it again replaces the handler installed by the previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_output: Whether to output one JSON object per line
        stream: Destination for log lines; defaults to sys.stderr

    Returns:
        The installed handler
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    stream = stream or sys.stderr

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.JSONRenderer()
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=stream.isatty())
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    remove_handler(root)

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)

    # Reduce noise from other libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return handler


def remove_handler(logger: logging.Logger | None = None) -> None:
    """Detach the handler installed by setup_logging, if any."""
    logger = logger or logging.getLogger()
    for existing in list(logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            logger.removeHandler(existing)
