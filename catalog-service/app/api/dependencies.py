from fastapi import Depends, Request

from app.adapters.implementations.rawg import RawgConnector, RawgNormalizer
from app.adapters.interfaces.connector import APIConnector
from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.services.catalog_service import CatalogService

# Initialize logger
logger = get_logger(__name__)


def create_connector(settings: Settings) -> RawgConnector:
    """
    Build the upstream connector from settings.

    Args:
        settings: Application settings

    Returns:
        RawgConnector: Connector owning a pooled HTTP client
    """
    if not settings.RAWG_API_KEY:
        logger.warning("RAWG_API_KEY is not set; upstream calls will be rejected")

    return RawgConnector(
        base_url=settings.RAWG_BASE_URL,
        timeout=settings.DEFAULT_TIMEOUT,
        retries=settings.TRANSPORT_RETRIES,
    )


async def get_connector(request: Request) -> APIConnector:
    """
    Dependency for providing the upstream connector.

    The connector is opened with the application and shared by all requests.

    Returns:
        APIConnector: The application's connector
    """
    return request.app.state.connector


async def get_catalog_service(
    connector: APIConnector = Depends(get_connector),
    settings: Settings = Depends(get_settings),
) -> CatalogService:
    """
    Dependency for providing the catalog service.

    A new service is built per request; it holds no state of its own.

    Returns:
        CatalogService: Service bound to the shared connector
    """
    return CatalogService(
        connector=connector,
        normalizer=RawgNormalizer(),
        api_key=settings.RAWG_API_KEY,
        page_count=settings.GAMES_PAGE_COUNT,
        concurrent_pages=settings.GAMES_CONCURRENT_FETCH,
    )
