"""TPU_WORKER_ID allocation for pods admitted into a TPU slice."""

from __future__ import annotations

from src.core.errors import MissingNodePoolLabelError, MissingPodIdentityError
from src.core.logging import structured_log
from src.core.telemetry import record_worker_id_assigned
from src.models.entities import SliceKey
from src.models.schemas import Pod
from src.services.identity_registry import IdentityRegistry


def slice_key_for_pod(pod: Pod, node_pool_label: str) -> SliceKey:
    """Derive the slice identity of a pod.

    KubeRay only sets metadata.generateName on the pods it creates, so that is the
    preferred identity; metadata.name is used for pods created with a fixed name.
    """
    labels = pod.metadata.labels or {}
    node_pool = (labels.get(node_pool_label) or "").strip()
    if not node_pool:
        raise MissingNodePoolLabelError(node_pool_label, pod.metadata.generate_name or pod.metadata.name)
    prefix = pod.metadata.generate_name or pod.metadata.name
    if not prefix:
        raise MissingPodIdentityError(node_pool)
    return SliceKey(node_pool=node_pool, pod_prefix=prefix)


class WorkerIndexAllocator:
    """Hands out worker indices from a registry, one per pod identity."""

    def __init__(self, registry: IdentityRegistry) -> None:
        self.registry = registry

    def allocate(self, key: SliceKey) -> int:
        assignment = self.registry.assign(key)
        if assignment.created:
            record_worker_id_assigned()
            structured_log(
                "INFO",
                "Assigned TPU worker id",
                operation="allocator.assign",
                metadata={"node_pool": key.node_pool, "pod_prefix": key.pod_prefix, "worker_id": assignment.index},
            )
        else:
            structured_log(
                "DEBUG",
                "Reusing TPU worker id",
                operation="allocator.reuse",
                metadata={"node_pool": key.node_pool, "pod_prefix": key.pod_prefix, "worker_id": assignment.index},
            )
        return assignment.index

    def allocate_for_pod(self, pod: Pod, node_pool_label: str) -> tuple[SliceKey, int]:
        key = slice_key_for_pod(pod, node_pool_label)
        return key, self.allocate(key)
