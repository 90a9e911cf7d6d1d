"""
telemetry/logging.py — Structured logging setup for Key Cracker.

All logging goes through structlog, routed into the standard library
logging tree so pygame-side and engine-side records share one handler.
Modules never configure logging themselves; they only do:

    logger = structlog.get_logger("keycracker.core.engine")
    logger.info("entry_accepted", successful_entries=3)

main.py calls setup_logging() once before the window opens. Tests leave
structlog unconfigured; its defaults print to stdout, which pytest captures.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from settings import LOG_FORMAT, LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL, fmt: str = LOG_FORMAT) -> None:
    """Configure structlog and the root logger.

    Args:
        level: Standard level name, e.g. "INFO" or "debug".
        fmt:   "json" for one JSON object per line, anything else for the
               colored console renderer.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
