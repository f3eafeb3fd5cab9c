"""Mutations applied to admitted objects: TPU_WORKER_HOSTNAMES and TPU_WORKER_ID injection."""

from __future__ import annotations

import time
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from src.core.config import Settings
from src.core.errors import ObjectDecodeError, UnexpectedKindError
from src.core.logging import structured_log
from src.core.telemetry import record_patch_operations, span
from src.models.entities import MutationResult
from src.models.schemas import AdmissionRequest, Pod, PatchOperation, RayCluster
from src.services.allocator import WorkerIndexAllocator
from src.services.hostnames import build_hostnames, join_hostnames
from src.services.patches import build_container_patches, env_var

RAY_CLUSTER_KIND = "RayCluster"
POD_KIND = "Pod"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _extract(request: AdmissionRequest, kind: str, model: type[ModelT]) -> ModelT:
    if request.kind.kind != kind:
        raise UnexpectedKindError(kind, request.kind.kind)
    if request.obj is None:
        raise ObjectDecodeError(kind, "request has no object")
    try:
        return model.model_validate(request.obj)
    except ValidationError as e:
        raise ObjectDecodeError(kind, f"{e.error_count()} validation error(s)") from e


def extract_ray_cluster(request: AdmissionRequest) -> RayCluster:
    """Decode the RayCluster carried by an admission request."""
    return _extract(request, RAY_CLUSTER_KIND, RayCluster)


def extract_pod(request: AdmissionRequest) -> Pod:
    """Decode the Pod carried by an admission request."""
    return _extract(request, POD_KIND, Pod)


def mutate_ray_cluster(uid: str, cluster: RayCluster, settings: Settings) -> MutationResult:
    """Add TPU_WORKER_HOSTNAMES to every container of every worker group."""
    start = time.perf_counter()
    patches: list[PatchOperation] = []
    with span("mutation.ray_cluster", {"uid": uid, "worker_groups": len(cluster.spec.worker_group_specs)}):
        for i, group in enumerate(cluster.spec.worker_group_specs):
            hostnames = build_hostnames(group.replicas or 0, settings.worker_hostname_prefix)
            variable = env_var(
                settings.worker_hostnames_env_name,
                join_hostnames(hostnames, settings.hostname_separator),
            )
            patches.extend(
                build_container_patches(
                    f"/spec/workerGroupSpecs/{i}/template/spec/containers",
                    group.template.spec.containers,
                    variable,
                )
            )
    record_patch_operations(len(patches))
    structured_log(
        "INFO",
        "Injected worker hostnames into RayCluster",
        uid=uid,
        kind=RAY_CLUSTER_KIND,
        operation="mutation.ray_cluster",
        duration_ms=(time.perf_counter() - start) * 1000,
        metadata={"cluster": cluster.metadata.name, "patches": len(patches)},
    )
    return MutationResult(uid=uid, patches=patches)


def mutate_pod(uid: str, pod: Pod, allocator: WorkerIndexAllocator, settings: Settings) -> MutationResult:
    """Assign the pod a worker index in its slice and add TPU_WORKER_ID to each container.

    Raises MissingNodePoolLabelError / MissingPodIdentityError before any index is
    handed out when the pod's slice identity cannot be derived.
    """
    start = time.perf_counter()
    with span("mutation.pod", {"uid": uid}):
        key, worker_id = allocator.allocate_for_pod(pod, settings.node_pool_label)
        patches = build_container_patches(
            "/spec/containers",
            pod.spec.containers,
            env_var(settings.worker_id_env_name, str(worker_id)),
        )
    record_patch_operations(len(patches))
    structured_log(
        "INFO",
        "Injected worker id into Pod",
        uid=uid,
        kind=POD_KIND,
        operation="mutation.pod",
        duration_ms=(time.perf_counter() - start) * 1000,
        metadata={"slice": str(key), "worker_id": worker_id, "patches": len(patches)},
    )
    return MutationResult(uid=uid, patches=patches, worker_id=worker_id)
