"""OpenTelemetry metrics definitions and recording."""

import logging
from typing import Any

from opentelemetry import metrics

logger = logging.getLogger(__name__)

_metrics_registry: "MetricsRegistry | None" = None


class MetricsRegistry:
    """
    Registry for OpenTelemetry metrics.

    Provides pre-defined metrics for the assistant:
    - Completion provider calls (count, latency) per prompt
    - Catalog tool calls (count, latency) per tool
    - Conversation turns per branch taken
    """

    def __init__(self, meter_name: str = "admin_assistant") -> None:
        self._meter = metrics.get_meter(meter_name)
        self._instruments: dict[str, Any] = {}
        self._create_instruments()

    def _create_instruments(self) -> None:
        """Create all metric instruments."""
        self._instruments["completion_calls_total"] = self._meter.create_counter(
            name="completion_calls_total",
            description="Total completion provider calls",
            unit="1",
        )
        self._instruments["completion_duration"] = self._meter.create_histogram(
            name="completion_call_duration_seconds",
            description="Duration of completion provider calls in seconds",
            unit="s",
        )
        self._instruments["tool_calls_total"] = self._meter.create_counter(
            name="catalog_tool_calls_total",
            description="Total catalog tool invocations",
            unit="1",
        )
        self._instruments["tool_duration"] = self._meter.create_histogram(
            name="catalog_tool_duration_seconds",
            description="Duration of catalog tool invocations in seconds",
            unit="s",
        )
        self._instruments["turns_total"] = self._meter.create_counter(
            name="conversation_turns_total",
            description="Conversation turns by interpreter branch",
            unit="1",
        )

    def record_completion_call(
        self,
        prompt_name: str,
        duration_seconds: float,
        status: str = "success",
    ) -> None:
        """
        Record a completion provider call.

        Args:
            prompt_name: Name of the prompt template.
            duration_seconds: Call duration.
            status: success, invalid_output, unavailable or tool_error.
        """
        labels = {"prompt": prompt_name, "status": status}
        self._instruments["completion_calls_total"].add(1, labels)
        self._instruments["completion_duration"].record(duration_seconds, labels)

    def record_tool_call(
        self,
        tool_name: str,
        duration_seconds: float,
        status: str = "success",
    ) -> None:
        """Record a catalog tool invocation."""
        labels = {"tool": tool_name, "status": status}
        self._instruments["tool_calls_total"].add(1, labels)
        self._instruments["tool_duration"].record(duration_seconds, labels)

    def record_turn(self, branch: str) -> None:
        """Record which interpreter branch handled a turn."""
        self._instruments["turns_total"].add(1, {"branch": branch})


def get_metrics_registry() -> MetricsRegistry:
    """Get the global metrics registry, creating it on first use."""
    global _metrics_registry
    if _metrics_registry is None:
        _metrics_registry = MetricsRegistry()
    return _metrics_registry


def record_completion_call(prompt_name: str, duration_seconds: float, status: str = "success") -> None:
    """Record a completion provider call on the global registry."""
    get_metrics_registry().record_completion_call(prompt_name, duration_seconds, status)


def record_tool_call(tool_name: str, duration_seconds: float, status: str = "success") -> None:
    """Record a catalog tool invocation on the global registry."""
    get_metrics_registry().record_tool_call(tool_name, duration_seconds, status)


def record_turn(branch: str) -> None:
    """Record an interpreter branch on the global registry."""
    get_metrics_registry().record_turn(branch)
