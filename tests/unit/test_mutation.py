"""Unit tests for RayCluster and Pod mutations."""

import pytest

from src.core.config import Settings
from src.core.errors import MissingNodePoolLabelError, ObjectDecodeError, UnexpectedKindError
from src.models.schemas import AdmissionRequest, Pod, RayCluster
from src.services.allocator import WorkerIndexAllocator
from src.services.mutation import extract_pod, extract_ray_cluster, mutate_pod, mutate_ray_cluster
from tests.factories import (
    make_container,
    make_pod,
    make_ray_cluster,
    make_review,
    make_worker_group,
)

HOSTNAMES_4 = "worker-0,worker-1,worker-2,worker-3"


def _request(obj: dict, kind: str) -> AdmissionRequest:
    return AdmissionRequest.model_validate(make_review(obj, kind)["request"])


def test_ray_cluster_patches_every_container_of_every_group(settings: Settings) -> None:
    cluster = RayCluster.model_validate(
        make_ray_cluster(
            [
                make_worker_group(4, [make_container("a"), make_container("b", env=[{"name": "X", "value": "1"}])]),
                make_worker_group(2, [make_container("c")], name="second"),
            ]
        )
    )
    result = mutate_ray_cluster("uid-1", cluster, settings)
    assert result.allowed is True
    assert result.patch_dicts() == [
        {
            "op": "add",
            "path": "/spec/workerGroupSpecs/0/template/spec/containers/0/env",
            "value": [{"name": "TPU_WORKER_HOSTNAMES", "value": HOSTNAMES_4}],
        },
        {
            "op": "add",
            "path": "/spec/workerGroupSpecs/0/template/spec/containers/1/env/-",
            "value": {"name": "TPU_WORKER_HOSTNAMES", "value": HOSTNAMES_4},
        },
        {
            "op": "add",
            "path": "/spec/workerGroupSpecs/1/template/spec/containers/0/env",
            "value": [{"name": "TPU_WORKER_HOSTNAMES", "value": "worker-0,worker-1"}],
        },
    ]


def test_ray_cluster_without_replicas_gets_empty_list(settings: Settings) -> None:
    cluster = RayCluster.model_validate(make_ray_cluster([make_worker_group(None, [make_container()])]))
    result = mutate_ray_cluster("uid-1", cluster, settings)
    assert result.patches[0].value == [{"name": "TPU_WORKER_HOSTNAMES", "value": ""}]


def test_ray_cluster_without_worker_groups(settings: Settings) -> None:
    cluster = RayCluster.model_validate(make_ray_cluster([]))
    assert mutate_ray_cluster("uid-1", cluster, settings).patches == []


def test_ray_cluster_uses_configured_names() -> None:
    settings = Settings(worker_hostname_prefix="host", hostname_separator=" ", worker_hostnames_env_name="PEERS")
    cluster = RayCluster.model_validate(make_ray_cluster([make_worker_group(2, [make_container()])]))
    result = mutate_ray_cluster("uid-1", cluster, settings)
    assert result.patches[0].value == [{"name": "PEERS", "value": "host-0 host-1"}]


def test_pod_gets_worker_id_in_each_container(settings: Settings, allocator: WorkerIndexAllocator) -> None:
    pod = Pod.model_validate(
        make_pod(containers=[make_container("a"), make_container("b", env=[{"name": "X", "value": "1"}])])
    )
    result = mutate_pod("uid-1", pod, allocator, settings)
    assert result.worker_id == 0
    assert result.patch_dicts() == [
        {"op": "add", "path": "/spec/containers/0/env", "value": [{"name": "TPU_WORKER_ID", "value": "0"}]},
        {"op": "add", "path": "/spec/containers/1/env/-", "value": {"name": "TPU_WORKER_ID", "value": "0"}},
    ]


def test_pod_readmission_yields_identical_patch(settings: Settings, allocator: WorkerIndexAllocator) -> None:
    pods = [Pod.model_validate(make_pod(generate_name=p)) for p in ("p0", "p1", "p2")]
    first = [mutate_pod(f"uid-{i}", pod, allocator, settings) for i, pod in enumerate(pods)]
    assert [r.worker_id for r in first] == [0, 1, 2]
    retry = mutate_pod("uid-retry", pods[1], allocator, settings)
    assert retry.worker_id == 1
    assert retry.patch_dicts() == first[1].patch_dicts()


def test_pod_without_node_pool_fails(settings: Settings, allocator: WorkerIndexAllocator) -> None:
    pod = Pod.model_validate(make_pod(node_pool=None))
    with pytest.raises(MissingNodePoolLabelError):
        mutate_pod("uid-1", pod, allocator, settings)
    assert allocator.registry.snapshot()["pods_assigned"] == 0


def test_extract_checks_kind() -> None:
    with pytest.raises(UnexpectedKindError) as exc:
        extract_ray_cluster(_request(make_pod(), "Pod"))
    assert "Expected RayCluster but got Pod" in exc.value.message
    with pytest.raises(UnexpectedKindError):
        extract_pod(_request(make_ray_cluster([]), "RayCluster"))


def test_extract_rejects_malformed_objects() -> None:
    with pytest.raises(ObjectDecodeError):
        extract_ray_cluster(_request(make_ray_cluster([make_worker_group(-1, [])]), "RayCluster"))
    bad_pod = make_pod()
    bad_pod["spec"]["containers"] = "not-a-list"
    with pytest.raises(ObjectDecodeError):
        extract_pod(_request(bad_pod, "Pod"))


def test_extract_requires_object() -> None:
    request = AdmissionRequest.model_validate({"uid": "u", "kind": {"kind": "Pod"}})
    with pytest.raises(ObjectDecodeError):
        extract_pod(request)
