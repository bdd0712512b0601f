# tests/conftest.py

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from deletion_service.config import AppConfig
from deletion_service.main import create_app
from deletion_service.plugins.facebook.data_deletion.models import DeletionOutcome

BASE_URL = "https://example.com"


@pytest.fixture
def settings() -> AppConfig:
    """Settings with an instant simulation and no tracing."""
    return AppConfig(
        simulated_deletion_delay_scale=0,
        otel_enabled=False,
        environment="test",
    )


@pytest.fixture
def deletion_backend() -> AsyncMock:
    """
    A deletion backend double that succeeds by default.
    Tests change ``delete_all_data.return_value`` / ``side_effect`` as needed.
    """
    backend = AsyncMock()
    backend.delete_all_data.side_effect = lambda subject_id: DeletionOutcome(
        subject_id=subject_id, success=True, stores_cleared=["profile"]
    )
    return backend


@pytest.fixture
def app(settings: AppConfig, deletion_backend: AsyncMock) -> FastAPI:
    return create_app(settings=settings, deletion_backend=deletion_backend)


@pytest.fixture
def test_client(app: FastAPI) -> TestClient:
    """
    A TestClient that talks to ``app`` as if it were served at BASE_URL.
    Server exceptions are rendered as responses instead of re-raised, the
    way a real server would answer.
    """
    with TestClient(app, base_url=BASE_URL, raise_server_exceptions=False) as client:
        yield client
