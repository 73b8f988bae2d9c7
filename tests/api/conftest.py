"""
Fixtures de la API: TestClient con dependencias sobre Redis simulado.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import (
    get_conversation_service,
    get_redis_client,
    get_ticket_service,
)
from infrastructure.persistence import RedisClient
from main import app


@pytest.fixture
def client(conversation_service, ticket_service):
    """
    Cliente HTTP con los servicios inyectados.

    Redis en modo fallback (sin reintentos) para el health check.
    """
    app.dependency_overrides[get_conversation_service] = lambda: conversation_service
    app.dependency_overrides[get_ticket_service] = lambda: ticket_service
    app.dependency_overrides[get_redis_client] = lambda: RedisClient(max_retries=0)
    yield TestClient(app)
    app.dependency_overrides.clear()
