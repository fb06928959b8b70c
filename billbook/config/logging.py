"""
structlog setup.

Log lines carry the request id and, once the bearer token is verified, the
owner id, bound through contextvars so use cases and repositories do not
have to pass them around.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from billbook.config.settings import get_settings


def _add_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    settings = get_settings()
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("env", settings.environment)
    return event_dict


def _renderer(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger from settings."""
    settings = get_settings()
    log_format = settings.log_format
    if log_format == "auto":
        log_format = "console" if settings.environment == "development" else "json"

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service,
        *_renderer(log_format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )
    for noisy in ("aiosqlite", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def bind_request_context(**values: Any) -> None:
    """Attach values (request_id, owner_id) to every log line of this request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
