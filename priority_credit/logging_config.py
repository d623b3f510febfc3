"""
Central logging configuration for the priority-credit registry.

Provides:
- Structured logging (JSON in production, human-readable in development)
- Request and block correlation via contextvars
- Environment-aware log levels

Usage:
    from priority_credit.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Validator registered", extra={"validator": principal})
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

# Set by RequestIdMiddleware for the duration of an HTTP request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Set by the chain while a block is being mined
block_height_var: ContextVar[Optional[int]] = ContextVar("block_height", default=None)
tx_index_var: ContextVar[Optional[int]] = ContextVar("tx_index", default=None)

_STANDARD_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName", "request_id", "block_height", "tx_index",
))


def get_request_id() -> Optional[str]:
    """Get the current request ID from context, if set."""
    return request_id_var.get()


@contextmanager
def block_context(height: int) -> Iterator[None]:
    """Tag every log record emitted inside the block with its height."""
    token = block_height_var.set(height)
    try:
        yield
    finally:
        block_height_var.reset(token)


@contextmanager
def tx_context(index: int) -> Iterator[None]:
    """Tag every log record emitted for one transaction with its index."""
    token = tx_index_var.set(index)
    try:
        yield
    finally:
        tx_index_var.reset(token)


class CorrelationFilter(logging.Filter):
    """Filter that adds request_id, block_height and tx_index from context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"  # type: ignore[attr-defined]
        height = block_height_var.get()
        index = tx_index_var.get()
        record.block_height = "-" if height is None else height  # type: ignore[attr-defined]
        record.tx_index = "-" if index is None else index  # type: ignore[attr-defined]
        return True


class JsonFormatter(logging.Formatter):
    """Format log records as JSON for production log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("request_id", "block_height", "tx_index"):
            value = getattr(record, attr, None)
            if value is not None and value != "-":
                log_obj[attr] = value

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Anything passed via extra= in the log call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and value is not None:
                try:
                    json.dumps(value)
                    log_obj[key] = value
                except (TypeError, ValueError):
                    log_obj[key] = str(value)

        return json.dumps(log_obj)


def _create_dev_formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s "
        "block=%(block_height)s tx=%(tx_index)s %(message)s",
        datefmt="%H:%M:%S",
    )


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Configure application-wide logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: 'development' or 'production'
        debug: If True, use DEBUG level regardless of log_level
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    # Records created before the filter runs still need the correlation fields
    old_factory = logging.getLogRecordFactory()

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = old_factory(*args, **kwargs)
        for attr in ("request_id", "block_height", "tx_index"):
            if not hasattr(record, attr):
                setattr(record, attr, "-")
        return record

    logging.setLogRecordFactory(record_factory)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers to avoid duplicates on reload
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(CorrelationFilter())

    if environment == "production":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(_create_dev_formatter())

    root.addHandler(handler)

    # Reduce noise from third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name.

    Records carry request_id / block_height / tx_index when available.
    Use extra={} for additional structured fields:
        logger.info("Developer registered", extra={"developer": principal})
    """
    return logging.getLogger(name)
