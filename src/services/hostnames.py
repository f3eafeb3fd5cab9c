"""Deterministic peer hostnames for TPU worker discovery."""

from __future__ import annotations

from typing import Iterable


def worker_hostname(index: int, prefix: str = "worker") -> str:
    return f"{prefix}-{index}"


def build_hostnames(replicas: int, prefix: str = "worker") -> list[str]:
    """Hostnames for worker indices 0..replicas-1, position i naming worker i."""
    if replicas < 0:
        raise ValueError(f"replicas must be >= 0, got {replicas}")
    return [worker_hostname(i, prefix) for i in range(replicas)]


def join_hostnames(hostnames: Iterable[str], separator: str = ",") -> str:
    return separator.join(hostnames)
