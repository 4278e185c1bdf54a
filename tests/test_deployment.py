import logging.config
from pathlib import Path

from fastapi.testclient import TestClient

from app.core.config import AppConfig, get_settings
from app.core.logging import get_logging_config
from app.main import create_app

ROOT = Path(__file__).resolve().parent.parent


def test_env_overrides(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("PORT", "1234")
    monkeypatch.setenv("SERVICE_NAME", "tunnel-origin")
    settings = get_settings()
    assert settings.port == 1234
    assert settings.service_name == "tunnel-origin"
    get_settings.cache_clear()


def test_default_bind_address(monkeypatch) -> None:
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    settings = AppConfig()
    assert settings.host == "0.0.0.0"
    assert settings.port == 8080


def test_security_headers() -> None:
    with TestClient(create_app()) as client:
        resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers.get("X-Content-Type-Options") == "nosniff"
    assert resp.headers.get("X-Frame-Options") == "DENY"
    assert resp.headers.get("X-XSS-Protection") == "1; mode=block"
    assert "max-age=31536000" in resp.headers.get("Strict-Transport-Security")
    assert resp.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"
    assert (
        resp.headers.get("Permissions-Policy")
        == "geolocation=(), microphone=(), camera=()"
    )
    assert "object-src 'none'" in resp.headers.get("Content-Security-Policy")
    assert resp.headers.get("Server") == "secure-origin"


def test_hsts_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("SECURITY_HSTS_MAX_AGE", "3600")
    monkeypatch.setenv("SECURITY_HSTS_INCLUDE_SUBDOMAINS", "false")

    with TestClient(create_app()) as client:
        resp = client.get("/health")

    assert resp.headers.get("Strict-Transport-Security") == "max-age=3600; preload"


def test_server_header_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("SERVER_HEADER", "edge-proxy")

    with TestClient(create_app()) as client:
        resp = client.get("/missing")

    assert resp.status_code == 404
    assert resp.headers.get("Server") == "edge-proxy"


def test_json_logging_config() -> None:
    config = get_logging_config(AppConfig(LOG_JSON=True, LOG_LEVEL="DEBUG"))

    assert config["handlers"]["console"]["formatter"] == "json"
    assert config["handlers"]["console"]["level"] == "DEBUG"
    assert "file" not in config["handlers"]
    logging.config.dictConfig(config)


def test_file_logging_config(tmp_path) -> None:
    log_file = tmp_path / "server.log"
    config = get_logging_config(AppConfig(LOG_FILE=str(log_file)))

    assert config["handlers"]["file"]["filename"] == str(log_file)
    assert config["loggers"]["app"]["handlers"] == ["console", "file"]
    logging.config.dictConfig(config)


def test_container_runs_service_as_non_root() -> None:
    dockerfile = (ROOT / "Dockerfile").read_text()

    assert "USER 1000:1000" in dockerfile
    assert "EXPOSE 8080" in dockerfile
    assert 'ENTRYPOINT ["secure-origin"]' in dockerfile
    assert dockerfile.index("USER 1000:1000") < dockerfile.index("ENTRYPOINT")


def test_compose_keeps_app_behind_tunnel() -> None:
    compose = (ROOT / "docker-compose.yml").read_text()
    app_service = compose.split("  app:\n", 1)[1].split("\n  cloudflared:\n", 1)[0]

    assert "ports:" not in app_service
    assert "tunnel-network" in app_service
    assert "image: cloudflare/cloudflared:latest" in compose
    assert "command: tunnel run" in compose


def test_tunnel_routes_to_app_port() -> None:
    config = (ROOT / "cloudflared" / "config.yml").read_text()

    assert "service: http://app:8080" in config
    assert config.rstrip().endswith("service: http_status:404")
