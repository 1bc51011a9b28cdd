"""structlog configuration for the HTTP service.

Library code only calls ``structlog.get_logger()``; this is applied once by
the service entry point.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(use_json: bool = True, level: int = logging.INFO) -> None:
    """Configure structlog output.

    Args:
        use_json: JSON lines when True, colored console output when False
        level: Minimum level to emit
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
