"""OpenTelemetry setup and tracing helpers."""

from showplan.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from showplan.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    get_trace_id,
    traced,
)

__all__ = [
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "add_span_event",
    "get_trace_id",
]
