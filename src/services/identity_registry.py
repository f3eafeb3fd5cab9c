"""In-memory registry of TPU worker IDs per slice (non-persistent)."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Optional

from src.models.entities import SliceKey


@dataclass(frozen=True)
class Assignment:
    index: int
    created: bool


class IdentityRegistry:
    """Pod identity -> worker index, plus the next free index per node pool.

    Entries are never evicted; a process restart resets every slice.
    """

    def __init__(self) -> None:
        self._assigned: dict[SliceKey, int] = {}
        self._next_index: dict[str, int] = {}
        self._lock = Lock()

    def assign(self, key: SliceKey) -> Assignment:
        """Return the index held by key, handing out the next one if it has none."""
        with self._lock:
            existing = self._assigned.get(key)
            if existing is not None:
                return Assignment(index=existing, created=False)
            index = self._next_index.get(key.node_pool, 0)
            self._assigned[key] = index
            self._next_index[key.node_pool] = index + 1
            return Assignment(index=index, created=True)

    def lookup(self, key: SliceKey) -> Optional[int]:
        with self._lock:
            return self._assigned.get(key)

    def issued(self, node_pool: str) -> int:
        """Number of indices handed out in a node pool."""
        with self._lock:
            return self._next_index.get(node_pool, 0)

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return {
                "slices_tracked": len(self._next_index),
                "pods_assigned": len(self._assigned),
            }
