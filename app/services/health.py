"""Health reporting service."""

from __future__ import annotations

from datetime import UTC, datetime

from app.models.responses import HealthResponse


class HealthService:
    """Report liveness of the service."""

    def __init__(self, service_name: str) -> None:
        self.service_name = service_name

    def get_health(self) -> HealthResponse:
        """Return the current health payload."""
        return HealthResponse(
            status="healthy",
            service=self.service_name,
            timestamp=datetime.now(UTC),
        )
