import asyncio
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, List, Sequence

from app.adapters.implementations.rawg import endpoints
from app.adapters.interfaces.connector import APIConnector, RequestDescriptor
from app.adapters.interfaces.normalizer import DataNormalizer, EntityType
from app.core.exceptions import APIException
from app.core.logging import get_logger
from app.domain import mappers
from app.domain.models.catalog import GameDetail, GameSearchResult, GameSummary
from app.domain.schemas.catalog import (
    GameDetailSchema,
    GameSearchResultSchema,
    GameSummarySchema,
    validate_names,
    validate_record,
    validate_records,
)

logger = get_logger(__name__)

DEFAULT_GAMES_PAGE_COUNT = 9


@dataclass(frozen=True)
class Pipeline:
    """Normalize, validate and map steps for one entity type."""
    entity_type: EntityType
    validate: Callable[[Any], Any]
    to_entity: Callable[[Any], Any]
    many: bool = True


GAME_SUMMARIES = Pipeline(
    EntityType.GAME_SUMMARY,
    partial(validate_records, GameSummarySchema),
    lambda records: [mappers.to_game_summary(record) for record in records],
)
GAME_SEARCH_RESULTS = Pipeline(
    EntityType.GAME_SEARCH_RESULT,
    partial(validate_records, GameSearchResultSchema),
    lambda records: [mappers.to_game_search_result(record) for record in records],
)
GAME_DETAIL = Pipeline(
    EntityType.GAME_DETAIL,
    partial(validate_record, GameDetailSchema),
    mappers.to_game_detail,
    many=False,
)
GENRE_NAMES = Pipeline(
    EntityType.NAME,
    partial(validate_names, schema_name="GenreList"),
    mappers.to_names,
)
PLATFORM_NAMES = Pipeline(
    EntityType.NAME,
    partial(validate_names, schema_name="PlatformList"),
    mappers.to_names,
)


class CatalogService:
    """
    Serves the catalog operations from the upstream API.

    Every operation runs the same pipeline: send the request(s), collect the
    raw records, normalize them, validate the normalized shape and map the
    validated records to domain entities. A failure at any step aborts the
    operation; nothing is retried and no partial result is returned.
    """

    def __init__(
        self,
        connector: APIConnector,
        normalizer: DataNormalizer,
        api_key: str,
        page_count: int = DEFAULT_GAMES_PAGE_COUNT,
        concurrent_pages: bool = False
    ):
        """
        Initialize the service.

        Args:
            connector: Connector used for every upstream call
            normalizer: Normalizer for the upstream payloads
            api_key: API key embedded in every request path
            page_count: Number of listing pages aggregated by ``get_games``
            concurrent_pages: Fetch listing pages concurrently instead of one by one
        """
        self.connector = connector
        self.normalizer = normalizer
        self.api_key = api_key
        self.page_count = page_count
        self.concurrent_pages = concurrent_pages

    async def get_games(self) -> List[GameSummary]:
        """Gets the first ``page_count`` listing pages as one list, in page order."""
        logger.info(f"Fetching {self.page_count} games pages")
        requests = [
            endpoints.games_page(self.api_key, page)
            for page in range(1, self.page_count + 1)
        ]
        responses = await self._send_all(requests)

        raw_records: List[Any] = []
        for response in responses:
            raw_records.extend(self.normalizer.extract_results(response))

        games = self._run_pipeline(raw_records, GAME_SUMMARIES)
        logger.info(f"Retrieved {len(games)} games")
        return games

    async def get_games_by_name(self, name: str) -> List[GameSearchResult]:
        """Searches games by name."""
        logger.info(f"Searching games matching '{name}'")
        response = await self.connector.send(endpoints.games_search(self.api_key, name))
        results = self._run_pipeline(self.normalizer.extract_results(response), GAME_SEARCH_RESULTS)
        logger.debug(f"Found {len(results)} games matching '{name}'")
        return results

    async def get_game_detail(self, game_id: int) -> GameDetail:
        """Gets the detail of one game."""
        logger.info(f"Fetching detail for game {game_id}")
        response = await self.connector.send(endpoints.game_detail(self.api_key, game_id))
        return self._run_pipeline(response, GAME_DETAIL)

    async def get_genres(self) -> List[str]:
        """Gets the genre names."""
        response = await self.connector.send(endpoints.genres(self.api_key))
        genres = self._run_pipeline(self.normalizer.extract_results(response), GENRE_NAMES)
        logger.debug(f"Retrieved {len(genres)} genres")
        return genres

    async def get_platforms(self) -> List[str]:
        """Gets the platform names."""
        response = await self.connector.send(endpoints.platforms(self.api_key))
        platforms = self._run_pipeline(self.normalizer.extract_results(response), PLATFORM_NAMES)
        logger.debug(f"Retrieved {len(platforms)} platforms")
        return platforms

    def _run_pipeline(self, raw: Any, pipeline: Pipeline) -> Any:
        if pipeline.many:
            normalized = self.normalizer.normalize_many(raw, pipeline.entity_type)
        else:
            normalized = self.normalizer.normalize(raw, pipeline.entity_type)
        return pipeline.to_entity(pipeline.validate(normalized))

    async def _send_all(self, requests: Sequence[RequestDescriptor]) -> List[Any]:
        """Send every request, returning the responses in request order."""
        if self.concurrent_pages:
            tasks = [asyncio.ensure_future(self.connector.send(r)) for r in requests]
            try:
                return list(await asyncio.gather(*tasks))
            except BaseException:
                # No page request may outlive the aborted aggregation
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                logger.error("Concurrent games page fetch failed; pending pages cancelled")
                raise

        responses = []
        for page, request in enumerate(requests, start=1):
            try:
                responses.append(await self.connector.send(request))
            except APIException:
                logger.error(f"Games page {page} failed; aborting aggregation")
                raise
        return responses
