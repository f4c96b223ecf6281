"""Structured JSON logging with trace and session correlation."""

import json
import logging
import sys
from contextvars import Token
from datetime import datetime, timezone
from typing import Any

from admin_assistant.observability.context import (
    get_current_session_id,
    get_log_extra,
    reset_log_extra,
    set_log_extra,
)
from admin_assistant.observability.tracing import get_current_span_id, get_current_trace_id


class StructuredLogFormatter(logging.Formatter):
    """
    JSON log formatter with trace and session correlation.

    Outputs logs in JSON format with:
    - Standard log fields (timestamp, level, message, logger)
    - Trace correlation (trace_id, span_id)
    - Conversation session (session_id)
    - Exception information
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        trace_id = get_current_trace_id()
        if trace_id:
            log_entry["trace_id"] = trace_id

        span_id = get_current_span_id()
        if span_id:
            log_entry["span_id"] = span_id

        session_id = get_current_session_id()
        if session_id:
            log_entry["session_id"] = session_id

        log_entry["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        extra = getattr(record, "extra", None) or get_log_extra()
        if extra:
            log_entry["extra"] = extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class SessionContextFilter(logging.Filter):
    """Logging filter that adds session and trace ids to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = get_current_session_id() or "-"
        record.trace_id = get_current_trace_id() or ""
        record.extra = getattr(record, "extra", None) or get_log_extra()
        return True


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    module_levels: dict[str, str] | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Default log level.
        json_format: If True, use JSON format. Otherwise, use standard format.
        module_levels: Per-module log levels (e.g., {"httpx": "WARNING"}).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    if json_format:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(session_id)s] %(message)s"
        ))

    handler.addFilter(SessionContextFilter())
    root_logger.addHandler(handler)

    if module_levels:
        for module, mod_level in module_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, mod_level.upper()))

    # Reduce noise from common libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.info(
        f"Logging configured: level={level}, json={json_format}, "
        f"module_levels={module_levels or {}}"
    )


class LogContext:
    """
    Context manager for adding extra fields to logs.

    The fields live in a context variable, so they follow the current task
    across awaits and never leak into concurrently running turns. Nested
    contexts merge with the enclosing fields.

    Usage:
        with LogContext(action="add_product_from_context"):
            logger.info("Dispatching quick action")  # Includes extra fields
    """

    def __init__(self, **kwargs: Any) -> None:
        self.extra = kwargs
        self._token: Token | None = None

    def __enter__(self) -> "LogContext":
        self._token = set_log_extra({**(get_log_extra() or {}), **self.extra})
        return self

    def __exit__(self, *args) -> None:
        if self._token is not None:
            reset_log_extra(self._token)
            self._token = None
