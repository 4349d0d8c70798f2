from __future__ import annotations

import logging
import os

import structlog


def _level() -> int:
    level = getattr(logging, os.getenv("SPARKY_LOG_LEVEL", "INFO").strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def setup_logger():
    level = _level()
    logging.basicConfig(format="%(message)s", level=level)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )

    return structlog.get_logger()
