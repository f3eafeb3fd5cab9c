"""Mutating admission endpoint for RayClusters and their TPU worker pods."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from src.api.dependencies import get_allocator
from src.core.config import Settings, get_settings
from src.core.errors import AdmissionDecodeError, WebhookError
from src.core.logging import structured_log
from src.core.telemetry import get_trace_context, record_admission_error, record_admission_review
from src.models.entities import MutationResult
from src.models.schemas import AdmissionResponse, AdmissionReview, AdmissionStatus
from src.services.allocator import WorkerIndexAllocator
from src.services.mutation import (
    POD_KIND,
    RAY_CLUSTER_KIND,
    extract_pod,
    extract_ray_cluster,
    mutate_pod,
    mutate_ray_cluster,
)
from src.services.patches import encode_patch

router = APIRouter(tags=["admission"])


async def _decode_review(request: Request) -> AdmissionReview:
    try:
        body = await request.json()
    except ValueError as e:
        raise AdmissionDecodeError() from e
    if not isinstance(body, dict):
        raise AdmissionDecodeError("Expected an AdmissionReview object")
    try:
        review = AdmissionReview.model_validate(body)
    except ValidationError as e:
        raise AdmissionDecodeError(f"Invalid AdmissionReview: {e.error_count()} validation error(s)") from e
    if review.request is None:
        raise AdmissionDecodeError("AdmissionReview has no request")
    return review


def _to_response(result: MutationResult) -> AdmissionResponse:
    response = AdmissionResponse(uid=result.uid, allowed=result.allowed)
    if result.patches:
        response.patch = encode_patch(result.patches)
        response.patch_type = "JSONPatch"
    if result.warnings:
        response.warnings = list(result.warnings)
    return response


def _unmutated(uid: str, exc: WebhookError, settings: Settings) -> AdmissionResponse:
    """Response for an object the webhook could not mutate: denied or passed through."""
    if settings.reject_invalid_objects:
        return AdmissionResponse(
            uid=uid,
            allowed=False,
            status=AdmissionStatus(code=exc.status_code, message=exc.message, reason=exc.error_code),
        )
    return _to_response(MutationResult(uid=uid, warnings=[exc.message]))


def review_response(
    review: AdmissionReview,
    allocator: WorkerIndexAllocator,
    settings: Settings,
) -> AdmissionReview:
    """Route a decoded review by kind and wrap the mutation in a response envelope."""
    request = review.request
    uid = request.uid
    kind = request.kind.kind
    record_admission_review(kind)
    ctx = get_trace_context()

    try:
        if kind == RAY_CLUSTER_KIND:
            result = mutate_ray_cluster(uid, extract_ray_cluster(request), settings)
        elif kind == POD_KIND:
            result = mutate_pod(uid, extract_pod(request), allocator, settings)
        else:
            structured_log("DEBUG", "Skipping unsupported kind", uid=uid, kind=kind, operation="admission.skip")
            result = MutationResult(uid=uid)
        response = _to_response(result)
    except WebhookError as exc:
        record_admission_error()
        structured_log(
            "WARNING",
            f"Could not mutate {kind}: {exc.message}",
            uid=uid,
            kind=kind,
            operation="admission.mutate",
            trace_id=ctx.get("trace_id"),
            span_id=ctx.get("span_id"),
            error={"type": exc.error_code, "details": exc.details},
        )
        response = _unmutated(uid, exc, settings)

    return AdmissionReview(api_version=review.api_version, response=response)


@router.post("/inject")
async def inject(
    request: Request,
    allocator: Annotated[WorkerIndexAllocator, Depends(get_allocator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, Any]:
    """Admission webhook: adds TPU_WORKER_HOSTNAMES to RayClusters and TPU_WORKER_ID to Pods."""
    review = await _decode_review(request)
    structured_log(
        "DEBUG",
        f"Received review for {review.request.kind.kind}",
        uid=review.request.uid,
        kind=review.request.kind.kind,
        operation="admission.receive",
        metadata={"operation": review.request.operation, "namespace": review.request.namespace},
    )
    return review_response(review, allocator, settings).to_wire()
