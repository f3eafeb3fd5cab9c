"""Pydantic models for the AdmissionReview envelope and the admitted objects.

Only the fields the webhook reads are declared; everything else is kept via
``extra="allow"`` so decoding never drops data the API server sent.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _KubeModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


# --- Admitted objects ---
class ObjectMeta(_KubeModel):
    name: Optional[str] = None
    generate_name: Optional[str] = Field(default=None, alias="generateName")
    namespace: Optional[str] = None
    labels: Optional[dict[str, str]] = None


class Container(_KubeModel):
    name: str = ""
    env: Optional[list[dict[str, Any]]] = None

    @property
    def env_count(self) -> int:
        return len(self.env or [])


class PodSpec(_KubeModel):
    containers: list[Container] = Field(default_factory=list)


class Pod(_KubeModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)


class PodTemplateSpec(_KubeModel):
    metadata: Optional[ObjectMeta] = None
    spec: PodSpec = Field(default_factory=PodSpec)


class WorkerGroupSpec(_KubeModel):
    group_name: Optional[str] = Field(default=None, alias="groupName")
    replicas: Optional[int] = Field(default=None, ge=0)
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)


class RayClusterSpec(_KubeModel):
    worker_group_specs: list[WorkerGroupSpec] = Field(default_factory=list, alias="workerGroupSpecs")


class RayCluster(_KubeModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: RayClusterSpec = Field(default_factory=RayClusterSpec)


# --- JSON Patch ---
class PatchOperation(BaseModel):
    """Single RFC 6902 operation."""

    op: Literal["add"] = "add"
    path: str
    value: Any


# --- Admission envelope (admission.k8s.io/v1) ---
class GroupVersionKind(_KubeModel):
    group: str = ""
    version: str = ""
    kind: str


class AdmissionRequest(_KubeModel):
    uid: str
    kind: GroupVersionKind
    namespace: Optional[str] = None
    name: Optional[str] = None
    operation: Optional[str] = None
    obj: Optional[dict[str, Any]] = Field(default=None, alias="object")


class AdmissionStatus(BaseModel):
    code: int
    message: str
    reason: Optional[str] = None


class AdmissionResponse(_KubeModel):
    uid: str
    allowed: bool = True
    patch: Optional[str] = None
    patch_type: Optional[Literal["JSONPatch"]] = Field(default=None, alias="patchType")
    status: Optional[AdmissionStatus] = None
    warnings: Optional[list[str]] = None


class AdmissionReview(_KubeModel):
    api_version: str = Field(default="admission.k8s.io/v1", alias="apiVersion")
    kind: str = "AdmissionReview"
    request: Optional[AdmissionRequest] = None
    response: Optional[AdmissionResponse] = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize with Kubernetes field names, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)
