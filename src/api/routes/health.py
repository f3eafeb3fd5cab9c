"""Health, readiness and metrics endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registry
from src.core.telemetry import get_metrics
from src.services.identity_registry import IdentityRegistry

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness: minimal check, <10ms."""
    return {"status": "ok"}


@router.get("/readiness", response_model=None)
async def readiness(request: Request):
    """Readiness: the identity registry is attached to the app."""
    if getattr(request.app.state, "registry", None) is None:
        return JSONResponse(status_code=503, content={"status": "unready", "error": "registry not initialized"})
    return {"status": "ready"}


@router.get("/metrics")
async def metrics(registry: Annotated[IdentityRegistry, Depends(get_registry)]) -> dict:
    """Simple JSON metrics endpoint for operational visibility."""
    snapshot = get_metrics()
    return {
        "admission_reviews_total": snapshot.get("admission_reviews_total", {}),
        "patch_operations_total": snapshot.get("patch_operations_total", 0),
        "worker_ids_assigned_total": snapshot.get("worker_ids_assigned_total", 0),
        "admission_errors_total": snapshot.get("admission_errors_total", 0),
        **registry.snapshot(),
    }
