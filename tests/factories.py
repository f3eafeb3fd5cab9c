"""Builders for admitted Kubernetes objects and AdmissionReview payloads."""

from typing import Any, Optional

NODE_POOL_LABEL = "cloud.google.com/gke-nodepool"


def make_container(name: str = "ray-worker", env: Optional[list[dict]] = None) -> dict[str, Any]:
    container: dict[str, Any] = {"name": name, "image": "rayproject/ray:2.9.0"}
    if env is not None:
        container["env"] = env
    return container


def make_pod(
    generate_name: Optional[str] = "p0",
    node_pool: Optional[str] = "tpu-pool-a",
    containers: Optional[list[dict]] = None,
    name: Optional[str] = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"namespace": "default", "labels": {"ray.io/node-type": "worker"}}
    if generate_name is not None:
        metadata["generateName"] = generate_name
    if name is not None:
        metadata["name"] = name
    if node_pool is not None:
        metadata["labels"][NODE_POOL_LABEL] = node_pool
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": metadata,
        "spec": {"containers": containers if containers is not None else [make_container()]},
    }


def make_worker_group(replicas: Optional[int], containers: list[dict], name: str = "tpu-group") -> dict[str, Any]:
    group: dict[str, Any] = {"groupName": name, "template": {"spec": {"containers": containers}}}
    if replicas is not None:
        group["replicas"] = replicas
    return group


def make_ray_cluster(worker_groups: list[dict]) -> dict[str, Any]:
    return {
        "apiVersion": "ray.io/v1alpha1",
        "kind": "RayCluster",
        "metadata": {"name": "tpu-cluster", "namespace": "default"},
        "spec": {
            "headGroupSpec": {"template": {"spec": {"containers": [make_container("ray-head")]}}},
            "workerGroupSpecs": worker_groups,
        },
    }


def make_review(obj: dict[str, Any], kind: str, uid: str = "uid-1") -> dict[str, Any]:
    group = "ray.io" if kind == "RayCluster" else ""
    version = "v1alpha1" if kind == "RayCluster" else "v1"
    return {
        "apiVersion": "admission.k8s.io/v1",
        "kind": "AdmissionReview",
        "request": {
            "uid": uid,
            "kind": {"group": group, "version": version, "kind": kind},
            "namespace": "default",
            "operation": "CREATE",
            "object": obj,
        },
    }
