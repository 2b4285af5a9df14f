"""Structured logging setup for ledgerkit."""

from __future__ import annotations

import logging
import sys

import structlog

DEFAULT_LOG_LEVEL = "WARNING"


def _resolve_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.WARNING)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure stdlib logging and structlog for the CLI.

    Log lines go to stderr so report output on stdout stays clean.
    """
    numeric_level = _resolve_level(level)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level, force=True)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str):
    return structlog.get_logger(name)
