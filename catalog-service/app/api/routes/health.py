from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from typing import Dict, List, Optional

from app import __version__
from app.adapters.implementations.rawg import PLATFORM_RAWG
from app.adapters.interfaces.connector import APIConnector, APIStatus
from app.api.dependencies import get_connector
from app.core.config import Settings, get_settings
from app.core.logging import get_logger

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str = "Catalog Service"


class DependencyStatus(BaseModel):
    """Status of a single dependency."""
    name: str
    status: str
    details: Optional[Dict] = None


class DetailedHealthStatus(HealthStatus):
    """Detailed health status with dependency information."""
    dependencies: List[DependencyStatus]


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health() -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Basic service health status
    """
    logger.debug("Health check requested")
    return HealthStatus(status="ok")


@health_router.get(
    "/detailed",
    response_model=DetailedHealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Returns health status including the upstream catalog API."
)
async def get_detailed_health(
    connector: APIConnector = Depends(get_connector),
    settings: Settings = Depends(get_settings),
) -> DetailedHealthStatus:
    """
    Detailed health check endpoint with upstream status.

    The service reports "degraded" when the upstream API is not fully
    available or no API key is configured.

    Returns:
        DetailedHealthStatus: Detailed service health with dependencies status
    """
    logger.debug("Detailed health check requested")

    upstream_status = await connector.is_available()
    api_key_configured = bool(settings.RAWG_API_KEY)

    dependencies = [
        DependencyStatus(
            name=PLATFORM_RAWG,
            status=upstream_status.value,
            details={"api_key_configured": api_key_configured}
        ),
    ]

    overall = "ok" if upstream_status == APIStatus.AVAILABLE and api_key_configured else "degraded"
    return DetailedHealthStatus(status=overall, dependencies=dependencies)
