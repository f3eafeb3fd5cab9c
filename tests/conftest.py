"""Pytest configuration and shared fixtures."""

import os

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("LOG_FORMAT", "readable")

from src.core.config import Settings  # noqa: E402
from src.core.telemetry import reset_metrics  # noqa: E402
from src.main import create_app  # noqa: E402
from src.services.allocator import WorkerIndexAllocator  # noqa: E402
from src.services.identity_registry import IdentityRegistry  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    reset_metrics()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def registry() -> IdentityRegistry:
    return IdentityRegistry()


@pytest.fixture
def allocator(registry: IdentityRegistry) -> WorkerIndexAllocator:
    return WorkerIndexAllocator(registry)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Fresh app (and registry) per test."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """FastAPI test client."""
    return TestClient(app)
