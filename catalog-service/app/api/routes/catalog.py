from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, ConfigDict, Field

from app.api.dependencies import get_catalog_service
from app.core.logging import get_logger
from app.domain.models.catalog import GameDetail, GameSearchResult, GameSummary
from app.services.catalog_service import CatalogService

# Initialize router and logger
catalog_router = APIRouter()
logger = get_logger(__name__)


class GameSummaryResponse(BaseModel):
    """A game in the catalog listing."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    image: Optional[str] = None
    genres: List[str]
    rating: Union[int, float]
    platforms: List[str]
    release_date: Optional[str] = Field(None, alias="releaseDate")

    @classmethod
    def from_entity(cls, game: GameSummary) -> "GameSummaryResponse":
        return cls(
            id=game.id,
            name=game.name,
            image=game.image,
            genres=list(game.genres),
            rating=game.rating,
            platforms=list(game.platforms),
            release_date=game.release_date,
        )


class GameSearchResultResponse(BaseModel):
    """A game matched by name."""

    id: int
    name: str
    image: Optional[str] = None
    genres: List[str]

    @classmethod
    def from_entity(cls, game: GameSearchResult) -> "GameSearchResultResponse":
        return cls(id=game.id, name=game.name, image=game.image, genres=list(game.genres))


class GameDetailResponse(BaseModel):
    """Full detail of a game."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    image: Optional[str] = None
    description: str
    genres: List[str]
    rating: Union[int, float]
    total_reviews: int = Field(..., alias="totalReviews")
    platforms: List[str]
    release_date: Optional[str] = Field(None, alias="releaseDate")
    stores: List[str]

    @classmethod
    def from_entity(cls, game: GameDetail) -> "GameDetailResponse":
        return cls(
            name=game.name,
            image=game.image,
            description=game.description,
            genres=list(game.genres),
            rating=game.rating,
            total_reviews=game.total_reviews,
            platforms=list(game.platforms),
            release_date=game.release_date,
            stores=list(game.stores),
        )


@catalog_router.get(
    "/games",
    response_model=List[GameSummaryResponse],
    status_code=status.HTTP_200_OK,
    summary="List games",
    description="Returns the first pages of the upstream games listing as one list."
)
async def get_games(
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> List[GameSummaryResponse]:
    """Gets the aggregated games listing."""
    games = await catalog_service.get_games()
    return [GameSummaryResponse.from_entity(game) for game in games]


@catalog_router.get(
    "/games/search",
    response_model=List[GameSearchResultResponse],
    status_code=status.HTTP_200_OK,
    summary="Search games by name"
)
async def search_games(
    name: str = Query(..., min_length=1, description="Text to search game names for"),
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> List[GameSearchResultResponse]:
    """Searches games by name."""
    games = await catalog_service.get_games_by_name(name)
    return [GameSearchResultResponse.from_entity(game) for game in games]


@catalog_router.get(
    "/games/{game_id}",
    response_model=GameDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get game detail"
)
async def get_game_detail(
    game_id: int = Path(..., gt=0, description="Upstream game id"),
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> GameDetailResponse:
    """Gets the detail of one game."""
    game = await catalog_service.get_game_detail(game_id)
    return GameDetailResponse.from_entity(game)


@catalog_router.get(
    "/genres",
    response_model=List[str],
    status_code=status.HTTP_200_OK,
    summary="List genre names"
)
async def get_genres(
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> List[str]:
    """Gets the genre names."""
    return await catalog_service.get_genres()


@catalog_router.get(
    "/platforms",
    response_model=List[str],
    status_code=status.HTTP_200_OK,
    summary="List platform names"
)
async def get_platforms(
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> List[str]:
    """Gets the platform names."""
    return await catalog_service.get_platforms()
