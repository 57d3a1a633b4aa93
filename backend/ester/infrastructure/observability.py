"""Structured Logging - JSON formatter, setup, and operation timing.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (entity, entity_id, error_code, path, operation, duration_ms) surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging installs at most one handler on the root logger

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - timed() logs durations instead of exporting metrics; no metrics backend is deployed
"""

import functools
import json
import logging
import time
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

_EXTRA_FIELDS = (
    "entity", "entity_id", "error_code", "path", "operation", "duration_ms",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.set_name("ester")
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == "ester":
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


def timed(operation: str | None = None):
    """Decorate an async callable to log its wall-clock duration at DEBUG."""

    def decorator(func):
        name = operation or func.__qualname__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                logger.debug(
                    f"{name} finished",
                    extra={
                        "operation": name,
                        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    },
                )

        return wrapper

    return decorator
