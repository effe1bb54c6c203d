"""Pytest configuration and fixtures."""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from food_calorie_api.api.dependencies import (
    get_audit_logger,
    get_food_mapping,
    get_prediction_client,
)
from food_calorie_api.main import app
from food_calorie_api.services.audit import AuditLogger
from food_calorie_api.services.food_mapping import FoodMappingTable

SAMPLE_MAPPING = """\
# label=displayName,calories,recommendation
pizza=Pizza,285,Eat in moderation
donuts=Donuts,452,Avoid
sushi = Sushi, 200, Eat
"""


@pytest.fixture
def food_mapping() -> FoodMappingTable:
    """Food mapping table with a few entries."""
    return FoodMappingTable.parse(SAMPLE_MAPPING)


@pytest.fixture
def prediction_client() -> MagicMock:
    """Prediction client whose predict() returns no results by default."""
    client = MagicMock()
    client.model_name = "projects/test-project/locations/us-central1/models/ICN123"
    client.predict = AsyncMock(return_value=[])
    return client


@pytest.fixture
def access_log_repository() -> MagicMock:
    """Access log repository that accepts every insert."""
    repository = MagicMock()
    repository.create_entry = AsyncMock(return_value="log_001")
    return repository


@pytest.fixture
def audit_logger(access_log_repository) -> AuditLogger:
    """Audit logger writing to the mocked repository."""
    return AuditLogger(access_log_repository)


@pytest.fixture
def override_services(food_mapping, prediction_client, audit_logger):
    """Replace the startup-created services with test doubles."""
    app.dependency_overrides[get_food_mapping] = lambda: food_mapping
    app.dependency_overrides[get_prediction_client] = lambda: prediction_client
    app.dependency_overrides[get_audit_logger] = lambda: audit_logger
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_services) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client.

    Requests come from an IPv4-mapped address, as on a dual-stack socket.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app, client=("::ffff:10.1.2.3", 52100))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
