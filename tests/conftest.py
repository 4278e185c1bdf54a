import pytest
from fastapi.testclient import TestClient

from app.core.config import SecurityOverrides, get_settings
from app.main import create_app

OVERRIDE_VARIABLES = [
    field.alias for field in SecurityOverrides.model_fields.values()
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Start every test from the built-in policy and fresh settings."""
    for name in [*OVERRIDE_VARIABLES, "SERVICE_NAME"]:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
