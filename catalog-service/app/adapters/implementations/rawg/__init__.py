"""
RAWG adapter package: connector, normalizer and request descriptors for the
RAWG video-game database API.
"""

from app.adapters.implementations.rawg import endpoints
from app.adapters.implementations.rawg.connector import RawgConnector
from app.adapters.implementations.rawg.normalizer import RawgNormalizer, sanitize_description

PLATFORM_RAWG = "rawg"

__all__ = [
    "endpoints",
    "RawgConnector",
    "RawgNormalizer",
    "sanitize_description",
    "PLATFORM_RAWG",
]
