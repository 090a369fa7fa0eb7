"""structlog setup for the inquiry service.

Service events and foreign stdlib records (uvicorn, SQLAlchemy, Alembic) share
one processor chain, so both come out as the same console lines or JSON
documents with the request's bound context.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

import structlog

from inquiry_service.infrastructure.db.engine import _mask_password

SERVICE_NAME = "inquiry-service"
LOG_FORMATS = ("console", "json")

# Loggers that drown out the service's own events outside DEBUG
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def _add_service(_logger, _method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _redact_urls(_logger, _method_name: str, event_dict: dict) -> dict:
    # Database URLs may carry credentials; never let one reach the output
    url = event_dict.get("url")
    if isinstance(url, str):
        event_dict["url"] = _mask_password(url)
    return event_dict


def _default_format() -> str:
    # Console renderer on a terminal, JSON lines in containers
    return os.environ.get("LOG_FORMAT") or ("console" if sys.stderr.isatty() else "json")


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    stream: TextIO | None = None,
) -> None:
    level = (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or _default_format()).lower()
    if fmt not in LOG_FORMATS:
        raise ValueError(f"LOG_FORMAT must be one of {LOG_FORMATS}, got {fmt!r}")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_service,
        _redact_urls,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor = (
        structlog.dev.ConsoleRenderer() if fmt == "console" else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # SQLAlchemy logs every statement at INFO when echo is on; only keep that in DEBUG
    noisy_level = logging.NOTSET if level == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)
