"""Core configuration, logging, errors, and telemetry."""

from src.core.config import Settings, get_settings
from src.core.errors import (
    AdmissionDecodeError,
    MissingNodePoolLabelError,
    MissingPodIdentityError,
    ObjectDecodeError,
    UnexpectedKindError,
    WebhookError,
)
from src.core.logging import configure_logging, structured_log
from src.core.telemetry import (
    get_metrics,
    get_trace_context,
    get_tracer,
    init_telemetry,
    instrument_fastapi,
    record_admission_error,
    record_admission_review,
    record_patch_operations,
    record_worker_id_assigned,
    span,
)

__all__ = [
    "Settings",
    "get_settings",
    "WebhookError",
    "AdmissionDecodeError",
    "UnexpectedKindError",
    "ObjectDecodeError",
    "MissingNodePoolLabelError",
    "MissingPodIdentityError",
    "configure_logging",
    "structured_log",
    "init_telemetry",
    "instrument_fastapi",
    "get_tracer",
    "get_trace_context",
    "get_metrics",
    "record_admission_review",
    "record_patch_operations",
    "record_worker_id_assigned",
    "record_admission_error",
    "span",
]
