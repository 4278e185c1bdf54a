"""Health check API endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_health_service
from app.models.responses import ErrorResponse, HealthResponse
from app.services import HealthService

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": ErrorResponse}},
)
async def health_check(
    service: HealthService = Depends(get_health_service),
) -> HealthResponse:
    """Return application health status."""
    return service.get_health()
