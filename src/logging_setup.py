"""Logging setup for applications embedding the engine.

The engine itself only emits records through module loggers and never
configures logging. The embedding application (dashboard backend, ingestion
job) calls configure_logging() once at startup, before validating or
matching anything.
"""

from __future__ import annotations

import logging
import sys

import structlog

from src.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name; defaults to settings.log_level.
    """
    level_name = (level or settings.log_level).upper()
    numeric_level = logging.getLevelNamesMapping().get(level_name)
    if numeric_level is None:
        msg = f"Invalid log level: {level_name}"
        raise ValueError(msg)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stdout,
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
