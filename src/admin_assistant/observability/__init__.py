"""Observability module for tracing, metrics, and logging."""

from admin_assistant.observability.context import get_current_session_id, session_context
from admin_assistant.observability.logging import LogContext, configure_logging
from admin_assistant.observability.metrics import (
    MetricsRegistry,
    get_metrics_registry,
    record_completion_call,
    record_tool_call,
    record_turn,
)
from admin_assistant.observability.tracing import (
    get_tracer,
    pipeline_span,
    traced,
)

__all__ = [
    # Session context
    "get_current_session_id",
    "session_context",
    # Tracing
    "get_tracer",
    "traced",
    "pipeline_span",
    # Metrics
    "MetricsRegistry",
    "get_metrics_registry",
    "record_completion_call",
    "record_tool_call",
    "record_turn",
    # Logging
    "LogContext",
    "configure_logging",
]
