"""Mapping from validated schemas to domain entities."""
from typing import List

from app.domain.models.catalog import GameDetail, GameSearchResult, GameSummary
from app.domain.schemas.catalog import (
    GameDetailSchema,
    GameSearchResultSchema,
    GameSummarySchema,
)


def to_game_summary(record: GameSummarySchema) -> GameSummary:
    return GameSummary(
        id=record.id,
        name=record.name,
        image=record.image,
        genres=tuple(record.genres),
        rating=record.rating,
        platforms=tuple(record.platforms),
        release_date=record.release_date,
    )


def to_game_search_result(record: GameSearchResultSchema) -> GameSearchResult:
    return GameSearchResult(
        id=record.id,
        name=record.name,
        image=record.image,
        genres=tuple(record.genres),
    )


def to_game_detail(record: GameDetailSchema) -> GameDetail:
    return GameDetail(
        name=record.name,
        image=record.image,
        description=record.description,
        genres=tuple(record.genres),
        rating=record.rating,
        total_reviews=record.total_reviews,
        platforms=tuple(record.platforms),
        release_date=record.release_date,
        stores=tuple(record.stores),
    )


def to_names(names: List[str]) -> List[str]:
    return list(names)
