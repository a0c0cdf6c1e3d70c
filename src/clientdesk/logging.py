"""Structured logging configuration.

structlog with contextvars merging, so the request_id and user_id bound by
the middleware show up on every log line emitted while serving a request.
Console output for development, JSON for production.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from clientdesk.config import settings


def configure_logging(
    json_output: bool | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structlog for the application.

    Args:
        json_output: Render JSON lines instead of the pretty console format.
            Defaults to ``settings.log_json``.
        log_level: Override log level (defaults to ``settings.log_level``).
    """
    if json_output is None:
        json_output = settings.log_json
    level = log_level or settings.log_level
    level_num = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level_num,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
