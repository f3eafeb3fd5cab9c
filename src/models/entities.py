"""In-memory entity models."""

from dataclasses import dataclass, field
from typing import Any

from src.models.schemas import PatchOperation


@dataclass(frozen=True)
class SliceKey:
    """Identity of one TPU worker pod within its slice."""

    node_pool: str
    pod_prefix: str

    def __str__(self) -> str:
        return f"{self.node_pool}/{self.pod_prefix}"


@dataclass
class MutationResult:
    """Outcome of mutating one admitted object."""

    uid: str
    patches: list[PatchOperation] = field(default_factory=list)
    allowed: bool = True
    warnings: list[str] = field(default_factory=list)
    worker_id: int | None = None

    def patch_dicts(self) -> list[dict[str, Any]]:
        return [p.model_dump() for p in self.patches]
