from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict
import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    """Enum defining supported HTTP methods."""
    GET = "GET"


class APIStatus(str, Enum):
    """Enum defining possible API status values."""
    AVAILABLE = "available"
    DEGRADED = "degraded"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class RequestDescriptor:
    """
    A single outbound request to the upstream API.

    ``path`` is relative to the connector's base URL and already carries its
    query string (API key included). ``payload`` holds the operation's
    arguments for logging; it is never sent as a request body.
    """
    method: HttpMethod
    path: str
    payload: Dict[str, Any] = field(default_factory=dict)


class APIConnector(ABC):
    """
    Abstract base interface for API connectors.

    A connector owns the transport to one external API. It sends request
    descriptors and hands back the decoded JSON body; every non-success
    status or transport failure is raised as ``UpstreamTransportError``.
    """

    @abstractmethod
    async def send(self, request: RequestDescriptor) -> Any:
        """
        Send a request and return the parsed JSON response.

        Args:
            request: Request descriptor to send

        Returns:
            Any: Decoded JSON body

        Raises:
            UpstreamTransportError: If the request fails or the status is not 2xx
        """
        pass

    @abstractmethod
    async def is_available(self) -> APIStatus:
        """
        Checks if the external API is available and functional.

        Returns:
            APIStatus: The current status of the API
        """
        pass

    async def close(self) -> None:
        """Release transport resources. No-op by default."""
        return None

    @staticmethod
    def validate_url(url: str) -> bool:
        """
        Validates that a URL is properly formatted.

        Args:
            url: The URL to validate

        Returns:
            bool: True if the URL is valid, False otherwise
        """
        try:
            result = urlparse(url)
            return all([result.scheme, result.netloc])
        except ValueError as e:
            logger.error(f"URL validation error: {str(e)}")
            return False

    @staticmethod
    def build_url(base_url: str, path: str) -> str:
        """
        Builds a complete URL from components.

        Args:
            base_url: The base URL of the API
            path: The path to the specific resource, query string included

        Returns:
            str: The complete URL
        """
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
