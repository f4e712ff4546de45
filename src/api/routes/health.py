"""Health check endpoint."""

from fastapi import APIRouter

from api.schemas import HealthResponse
from config import settings

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the critique service is running.",
)
async def health_check() -> HealthResponse:
    """Return service health status."""
    return HealthResponse(service=settings.app_name.lower())
