from app.core.exceptions import ConfigError, NotFoundError, ServiceException
from app.models.policy import SECURITY_HEADER_NAMES


def test_unknown_route_returns_404_with_headers(client) -> None:
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    data = response.json()
    assert data["error"]["type"] == "invalid_request_error"
    assert data["error"]["code"] == "not_found"
    for name in SECURITY_HEADER_NAMES:
        assert name in response.headers
    assert response.headers["Server"] == "secure-origin"


def test_service_exception_to_dict() -> None:
    error = ServiceException("bad", error_type="custom_error", error_code="c1")

    assert error.to_dict() == {
        "error": {"message": "bad", "type": "custom_error", "code": "c1"}
    }


def test_not_found_error_defaults() -> None:
    error = NotFoundError()

    assert error.status_code == 404
    assert error.to_dict()["error"]["code"] == "not_found"


def test_config_error_message() -> None:
    error = ConfigError("SECURITY_HSTS_PRELOAD", "maybe", "expected 'true' or 'false'")

    assert error.variable == "SECURITY_HSTS_PRELOAD"
    assert str(error) == (
        "Invalid value for SECURITY_HSTS_PRELOAD: 'maybe' "
        "(expected 'true' or 'false')"
    )
