"""
Structlog configuration for CONCORD.

Events go through stdlib logging so third-party loggers (uvicorn) share
the same output. The API logs to stdout, the command line tool to stderr
so stdout carries only results.
"""
import logging
import sys
from typing import TextIO

import structlog

LOG_FORMATS = ("auto", "json", "console")


def _renderer(log_format: str, stream: TextIO):
    if log_format == "console" or (log_format == "auto" and stream.isatty()):
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure(
    log_level: str = "INFO",
    stream: TextIO | None = None,
    log_format: str = "auto",
) -> None:
    """
    Configure structlog once at startup.

    Args:
        log_level: Root level name (DEBUG shows per-stage engine events)
        stream: Output stream, stdout if omitted
        log_format: "json", "console", or "auto" (console only on a TTY)
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
    stream = stream or sys.stdout

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_format, stream),
        ],
        foreign_pre_chain=pre_chain,
    ))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
