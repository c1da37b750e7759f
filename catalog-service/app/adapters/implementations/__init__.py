"""
Adapter implementations package for the upstream catalog API.
"""

from app.adapters.implementations.rawg import (
    RawgConnector,
    RawgNormalizer,
    PLATFORM_RAWG,
)

__all__ = [
    "RawgConnector",
    "RawgNormalizer",
    "PLATFORM_RAWG",
]
