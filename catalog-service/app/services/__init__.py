"""
Services package for the Catalog Service.

Services orchestrate the catalog operations, coordinating the upstream
connector, the normalizer, the response schemas and the entity mappers.
"""

from app.services.catalog_service import CatalogService

__all__ = ["CatalogService"]
