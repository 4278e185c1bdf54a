import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import ConfigError
from app.main import create_app
from app.models.policy import SecurityPolicy


def test_startup_stores_resolved_policy() -> None:
    """The resolved policy is available on app state for the app lifetime."""
    app = create_app()
    with TestClient(app) as client:
        assert client.app.state.policy == SecurityPolicy.defaults()
        assert app.state.settings.service_name == "secure-origin"


def test_invalid_environment_aborts_startup(monkeypatch) -> None:
    monkeypatch.setenv("SECURITY_HSTS_MAX_AGE", "notanumber")

    with pytest.raises(ConfigError, match="SECURITY_HSTS_MAX_AGE"):
        create_app()


def test_explicit_policy_skips_environment(monkeypatch) -> None:
    monkeypatch.setenv("SECURITY_HSTS_MAX_AGE", "notanumber")
    policy = SecurityPolicy(frame_options="SAMEORIGIN")

    with TestClient(create_app(policy=policy)) as client:
        response = client.get("/health")

    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
