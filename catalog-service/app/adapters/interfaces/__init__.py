"""
Interfaces package for the Catalog Service.

This package contains the abstract base interfaces used to standardize
interactions with the upstream catalog API.
"""

from .connector import APIConnector, APIStatus, HttpMethod, RequestDescriptor
from .normalizer import DataNormalizer, EntityType

__all__ = [
    # Connector interface
    'APIConnector',
    'APIStatus',
    'HttpMethod',
    'RequestDescriptor',

    # Normalizer interface
    'DataNormalizer',
    'EntityType',
]
