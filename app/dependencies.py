"""Dependency provider functions for FastAPI."""

from fastapi import Request

from app.core.config import AppConfig
from app.services import HealthService


def get_settings(request: Request) -> AppConfig:
    """Return application settings from app state."""
    return request.app.state.settings


def get_health_service(request: Request) -> HealthService:
    """Return the shared :class:`HealthService` instance."""
    return request.app.state.health_service
