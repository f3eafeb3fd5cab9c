"""OpenTelemetry and Cloud Trace integration with in-process counters."""

import os
from contextlib import contextmanager
from threading import Lock
from typing import Any, Generator, Optional

from opentelemetry import trace
from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

SERVICE_NAME = "kuberay-tpu-webhook"

_metrics: dict[str, Any] = {
    "admission_reviews_total": {},
    "patch_operations_total": 0,
    "worker_ids_assigned_total": 0,
    "admission_errors_total": 0,
}
_metrics_lock = Lock()
_provider_installed = False


def get_tracer(name: str = SERVICE_NAME) -> Any:
    """Return OpenTelemetry tracer (no-op until a provider is installed)."""
    return trace.get_tracer(name)


def get_trace_context() -> dict[str, str]:
    """Return trace_id and span_id for current span (for log correlation)."""
    current = trace.get_current_span()
    if current is None or not current.is_recording():
        return {}
    ctx = current.get_span_context()
    return {"trace_id": format(ctx.trace_id, "032x"), "span_id": format(ctx.span_id, "016x")}


def init_telemetry(service_name: str = SERVICE_NAME, project_id: Optional[str] = None) -> None:
    """Initialize Cloud Trace exporter and tracer provider."""
    global _provider_installed
    project = project_id or os.getenv("GCP_PROJECT_ID", "")
    if not project or _provider_installed:
        return
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(CloudTraceSpanExporter(project_id=project)))
    trace.set_tracer_provider(provider)
    _provider_installed = True


def instrument_fastapi(app: Any) -> None:
    """Instrument FastAPI app for automatic tracing."""
    FastAPIInstrumentor.instrument_app(app)


def record_admission_review(kind: str) -> None:
    """Increment admission_reviews_total for a kind."""
    with _metrics_lock:
        by_kind = _metrics["admission_reviews_total"]
        by_kind[kind] = by_kind.get(kind, 0) + 1


def record_patch_operations(count: int) -> None:
    with _metrics_lock:
        _metrics["patch_operations_total"] += count


def record_worker_id_assigned() -> None:
    with _metrics_lock:
        _metrics["worker_ids_assigned_total"] += 1


def record_admission_error() -> None:
    with _metrics_lock:
        _metrics["admission_errors_total"] += 1


def get_metrics() -> dict[str, Any]:
    """Return current metrics snapshot (for /metrics or tests)."""
    with _metrics_lock:
        out = dict(_metrics)
        out["admission_reviews_total"] = dict(_metrics["admission_reviews_total"])
        return out


def reset_metrics() -> None:
    """Zero all counters."""
    with _metrics_lock:
        _metrics["admission_reviews_total"] = {}
        _metrics["patch_operations_total"] = 0
        _metrics["worker_ids_assigned_total"] = 0
        _metrics["admission_errors_total"] = 0


@contextmanager
def span(name: str, attributes: Optional[dict[str, Any]] = None) -> Generator[Any, None, None]:
    """Context manager for a child span."""
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span_obj:
        if attributes:
            for key, val in attributes.items():
                span_obj.set_attribute(key, str(val))
        yield span_obj
