"""Structured logging for the tl;dv MCP Server.

stdout carries the MCP stdio framing, so every log line goes to a
separate stream (stderr unless another sink is injected). Lines are
rendered as JSON with an ISO timestamp and the level.

Usage:
    configure_logging(level="INFO")  # once, at process start
    log = structlog.get_logger(__name__)
    log.info("Starting MCP server...")
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import structlog


def configure_logging(stream: Optional[TextIO] = None, level: str = "INFO") -> None:
    """Configure structlog processors and the output sink.

    Args:
        stream: Writable text stream; defaults to `sys.stderr`.
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
    """

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
