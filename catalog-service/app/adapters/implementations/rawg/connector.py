import time
from typing import Any, Optional

import httpx

from app.adapters.interfaces.connector import APIConnector, APIStatus, RequestDescriptor
from app.core.exceptions import UpstreamTransportError
from app.core.logging import get_logger

logger = get_logger(__name__)


class RawgConnector(APIConnector):
    """
    HTTP connector for the RAWG video-game database API.

    Wraps a pooled ``httpx.AsyncClient``. Connection failures are retried by
    the httpx transport (``retries``); nothing above the socket is retried.
    Request paths are logged without their query string so the API key never
    reaches the logs.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        retries: int = 1,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the connector.

        Args:
            base_url: Base URL of the RAWG API
            timeout: Request timeout in seconds
            retries: Connection-level retries performed by the transport
            client: Optional preconfigured client, mainly for tests
        """
        if not self.validate_url(base_url):
            raise ValueError(f"Invalid RAWG base URL: {base_url!r}")

        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            transport=httpx.AsyncHTTPTransport(retries=retries),
        )
        logger.info(f"RAWG connector initialized for {self.base_url}")

    async def send(self, request: RequestDescriptor) -> Any:
        url = self.build_url(self.base_url, request.path)
        endpoint = request.path.split("?", 1)[0]
        start_time = time.time()

        try:
            response = await self._client.request(request.method.value, url)
        except httpx.RequestError as e:
            logger.error(
                f"RAWG request to {endpoint} failed: {type(e).__name__}",
                extra={"data": {"endpoint": endpoint, "method": request.method.value}}
            )
            raise UpstreamTransportError(
                detail=f"Upstream request to {endpoint} failed",
                context={"endpoint": endpoint, "error_type": type(e).__name__}
            ) from e

        duration_ms = round((time.time() - start_time) * 1000, 2)
        logger.debug(
            f"RAWG request to {endpoint} completed",
            extra={"data": {
                "endpoint": endpoint,
                "method": request.method.value,
                "arguments": request.payload,
                "status_code": response.status_code,
                "duration_ms": duration_ms
            }}
        )

        if not response.is_success:
            logger.warning(
                f"RAWG returned {response.status_code} for {endpoint}",
                extra={"data": {"endpoint": endpoint, "status_code": response.status_code}}
            )
            raise UpstreamTransportError(
                detail=f"Upstream returned {response.status_code} for {endpoint}",
                upstream_status=response.status_code,
                context={"endpoint": endpoint}
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"RAWG returned a non-JSON body for {endpoint}")
            raise UpstreamTransportError(
                detail=f"Upstream returned an undecodable body for {endpoint}",
                upstream_status=response.status_code,
                context={"endpoint": endpoint}
            ) from e

    async def is_available(self) -> APIStatus:
        try:
            response = await self._client.get(self.build_url(self.base_url, "/"))
        except httpx.RequestError as e:
            logger.warning(f"RAWG availability check failed: {type(e).__name__}")
            return APIStatus.UNAVAILABLE

        if response.status_code >= 500:
            return APIStatus.DEGRADED
        return APIStatus.AVAILABLE

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("RAWG connector closed")
