"""Services: identity registry, worker index allocation, hostnames, JSON patches, mutations."""

from src.services.allocator import WorkerIndexAllocator, slice_key_for_pod
from src.services.hostnames import build_hostnames, join_hostnames
from src.services.identity_registry import IdentityRegistry
from src.services.mutation import (
    extract_pod,
    extract_ray_cluster,
    mutate_pod,
    mutate_ray_cluster,
)
from src.services.patches import build_container_patches, build_env_patch, encode_patch

__all__ = [
    "IdentityRegistry",
    "WorkerIndexAllocator",
    "slice_key_for_pod",
    "build_hostnames",
    "join_hostnames",
    "build_env_patch",
    "build_container_patches",
    "encode_patch",
    "extract_pod",
    "extract_ray_cluster",
    "mutate_pod",
    "mutate_ray_cluster",
]
