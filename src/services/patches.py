"""JSON Patch (RFC 6902) builders for container environment injection."""

from __future__ import annotations

import base64
import json
from typing import Iterable

from src.models.schemas import Container, PatchOperation


def env_var(name: str, value: str) -> dict[str, str]:
    return {"name": name, "value": value}


def build_env_patch(container_path: str, existing_env_count: int, variable: dict[str, str]) -> PatchOperation:
    """Add variable to the env list at container_path.

    An empty or absent env list is created with the variable as its only entry;
    otherwise the variable is appended with the "-" array index.
    """
    path = f"{container_path}/env"
    if existing_env_count == 0:
        return PatchOperation(path=path, value=[variable])
    return PatchOperation(path=f"{path}/-", value=variable)


def build_container_patches(
    containers_path: str,
    containers: Iterable[Container],
    variable: dict[str, str],
) -> list[PatchOperation]:
    """One env patch per container, in container order."""
    return [
        build_env_patch(f"{containers_path}/{i}", container.env_count, variable)
        for i, container in enumerate(containers)
    ]


def encode_patch(patches: Iterable[PatchOperation]) -> str:
    """Serialize patches the way AdmissionResponse.patch expects (base64 JSON)."""
    raw = json.dumps([p.model_dump() for p in patches], separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_patch(encoded: str) -> list[dict]:
    return json.loads(base64.b64decode(encoded))
