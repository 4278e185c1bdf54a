"""Root endpoint with host-based routing."""

import html
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from app.core.config import AppConfig
from app.dependencies import get_health_service, get_settings
from app.services import HealthService

logger = logging.getLogger(__name__)

router = APIRouter()

# Requests for health.<domain>/ are answered with the health payload.
HEALTH_HOST_PREFIX = "health."


def render_index(service_name: str) -> str:
    """Return the landing page HTML."""
    return (
        "<h1>Hello World</h1>"
        f"<p>{html.escape(service_name)} - secure origin service</p>"
    )


@router.get("/", response_class=HTMLResponse, response_model=None)
async def root(
    request: Request,
    settings: AppConfig = Depends(get_settings),
    service: HealthService = Depends(get_health_service),
) -> Response:
    """Serve the landing page, or the health payload on the health host."""
    hostname = request.headers.get("host", "")
    if hostname.startswith(HEALTH_HOST_PREFIX):
        logger.debug("Routing %s to health check", hostname)
        return JSONResponse(content=service.get_health().model_dump(mode="json"))
    return HTMLResponse(content=render_index(settings.service_name))
