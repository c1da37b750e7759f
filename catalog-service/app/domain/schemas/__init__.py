"""Schemas that gate normalized upstream payloads."""

from app.domain.schemas.catalog import (
    GameDetailSchema,
    GameSearchResultSchema,
    GameSummarySchema,
    validate_names,
    validate_record,
    validate_records,
)

__all__ = [
    "GameDetailSchema",
    "GameSearchResultSchema",
    "GameSummarySchema",
    "validate_names",
    "validate_record",
    "validate_records",
]
