"""Root logging setup.

``configure_root_logging`` is called once by the composition root (the
FastAPI lifespan or a CLI command). Importing this module has no side
effects.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from switchboard.core.logging.filters.http import HttpRequestLogDowngradeFilter
from switchboard.core.logging.formatters.correlation import CorrelationFormatter

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

NOISY_HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
)

UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

logger = logging.getLogger(__name__)

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def resolve_log_level(raw_level: str | None) -> str:
    """Return a valid level name, using only the first word of ``raw_level``.

    Anything unrecognised falls back to INFO.
    """
    words = (raw_level or "").split()
    level = words[0].upper() if words else "INFO"
    return level if level in VALID_LOG_LEVELS else "INFO"


def set_noisy_http_logger_levels(current_log_level: str) -> None:
    """Ensure HTTP client noise only surfaces at DEBUG level."""

    noisy_level = logging.DEBUG if current_log_level == "DEBUG" else logging.WARNING
    for logger_name in NOISY_HTTP_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def install_correlation_record_factory() -> None:
    """Wrap the record factory once so records carry the current correlation id.

    The id lives in a ContextVar, so concurrent requests on one event loop
    each see their own value.
    """
    current_factory = logging.getLogRecordFactory()
    if getattr(current_factory, "stamps_correlation_id", False):
        return

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = current_factory(*args, **kwargs)
        correlation_id = _correlation_id.get()
        if correlation_id is not None:
            record.correlation_id = correlation_id
        return record

    record_factory.stamps_correlation_id = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(record_factory)


def configure_root_logging(log_level: str | None = "INFO") -> str:
    """Install a single correlation-aware stream handler on the root logger.

    Returns:
        The effective level name.
    """
    level = resolve_log_level(log_level)

    handler = logging.StreamHandler()
    handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))
    handler.setFormatter(CorrelationFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level))

    # Uvicorn stays quiet unless we are debugging
    uvicorn_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for uvicorn_logger in UVICORN_LOGGERS:
        logging.getLogger(uvicorn_logger).setLevel(uvicorn_level)

    set_noisy_http_logger_levels(level)
    install_correlation_record_factory()
    logger.debug(f"Logging configured at {level}")
    return level


class ConversationLogger:
    """Logger with correlation ID support"""

    @staticmethod
    def get_logger() -> logging.Logger:
        return logging.getLogger("conversation")

    @staticmethod
    @contextmanager
    def correlation_context(request_id: str) -> Generator[None, None, None]:
        """Stamp every record created inside the block with ``correlation_id``."""
        install_correlation_record_factory()
        token = _correlation_id.set(request_id)
        try:
            yield
        finally:
            _correlation_id.reset(token)
