"""
Adapters package for the Catalog Service.

This package contains components for integrating with the upstream catalog API:
- Abstract interfaces that define the contracts for connectors and normalizers
- The concrete RAWG implementation
"""

from . import interfaces

__all__ = [
    'interfaces',
]
