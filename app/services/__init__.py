"""Service layer modules for the origin server."""

from .health import HealthService

__all__ = [
    "HealthService",
]
