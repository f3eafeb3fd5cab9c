"""FastAPI dependencies: the per-app identity registry and allocator."""

from typing import Annotated

from fastapi import Depends, Request

from src.services.allocator import WorkerIndexAllocator
from src.services.identity_registry import IdentityRegistry


def get_registry(request: Request) -> IdentityRegistry:
    """Return the registry created with the application."""
    return request.app.state.registry


def get_allocator(
    registry: Annotated[IdentityRegistry, Depends(get_registry)],
) -> WorkerIndexAllocator:
    return WorkerIndexAllocator(registry)
