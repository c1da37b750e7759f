"""
Domain models package for the Catalog Service.

Immutable entities returned to callers. They are built fresh per request
and never mutated.
"""

from app.domain.models.catalog import (
    GameDetail,
    GameSearchResult,
    GameSummary,
    HTML_TAG_PATTERN,
)

__all__ = [
    "GameDetail",
    "GameSearchResult",
    "GameSummary",
    "HTML_TAG_PATTERN",
]
