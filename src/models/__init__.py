"""Data models: admission envelope, Kubernetes object subsets, entities."""

from src.models.entities import MutationResult, SliceKey
from src.models.schemas import (
    AdmissionRequest,
    AdmissionResponse,
    AdmissionReview,
    AdmissionStatus,
    Container,
    PatchOperation,
    Pod,
    RayCluster,
    WorkerGroupSpec,
)

__all__ = [
    "MutationResult",
    "SliceKey",
    "AdmissionRequest",
    "AdmissionResponse",
    "AdmissionReview",
    "AdmissionStatus",
    "Container",
    "PatchOperation",
    "Pod",
    "RayCluster",
    "WorkerGroupSpec",
]
