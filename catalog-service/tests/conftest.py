"""Pytest fixtures for the catalog pipeline tests."""

import asyncio
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import pytest

from app.adapters.implementations.rawg import RawgNormalizer
from app.adapters.interfaces.connector import APIConnector, APIStatus, RequestDescriptor
from app.services.catalog_service import CatalogService

API_KEY = "test-key"


class FakeConnector(APIConnector):
    """Connector double that records requests and answers through a handler."""

    def __init__(
        self,
        handler: Callable[[RequestDescriptor], Any],
        status: APIStatus = APIStatus.AVAILABLE,
        delay: Optional[Callable[[RequestDescriptor], float]] = None
    ):
        self.handler = handler
        self.status = status
        self.delay = delay
        self.requests: List[RequestDescriptor] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.completed = 0

    async def send(self, request: RequestDescriptor) -> Any:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay(request) if self.delay else 0)
            response = self.handler(request)
            self.completed += 1
            return response
        finally:
            self.in_flight -= 1

    async def is_available(self) -> APIStatus:
        return self.status

    def endpoints(self) -> List[str]:
        return [request.path.split("?", 1)[0] for request in self.requests]


def query_of(request: RequestDescriptor) -> Dict[str, str]:
    """Single-valued query parameters of a request path."""
    return {key: values[0] for key, values in parse_qs(urlsplit(request.path).query).items()}


def raw_game(game_id: int, name: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
    """A RAWG listing record, trimmed to the fields the catalog reads plus noise."""
    record = {
        "id": game_id,
        "slug": f"game-{game_id}",
        "name": name or f"Game {game_id}",
        "released": "2015-05-18",
        "background_image": f"https://media.rawg.io/games/{game_id}.jpg",
        "rating": 4.5,
        "ratings_count": 120,
        "genres": [
            {"id": 4, "name": "Action", "slug": "action"},
            {"id": 5, "name": "RPG", "slug": "role-playing-games-rpg"},
        ],
        "platforms": [
            {"platform": {"id": 4, "name": "PC", "slug": "pc"}, "released_at": "2015-05-18"},
            {"platform": {"id": 187, "name": "PlayStation 5", "slug": "playstation5"}},
        ],
    }
    record.update(overrides)
    return record


def raw_game_detail(**overrides: Any) -> Dict[str, Any]:
    """A RAWG game detail payload."""
    record = raw_game(3328, "The Witcher 3: Wild Hunt")
    record.update({
        "description": "<p>Hello &#39;world&#39;</p>",
        "description_raw": "Hello 'world'",
        "stores": [
            {"id": 354780, "store": {"id": 1, "name": "Steam", "domain": "store.steampowered.com"}},
            {"id": 3565, "store": {"id": 5, "name": "GOG", "domain": "gog.com"}},
        ],
    })
    record.update(overrides)
    return record


def listing(results: List[Any], next_url: Optional[str] = None) -> Dict[str, Any]:
    return {"count": len(results), "next": next_url, "previous": None, "results": results}


@pytest.fixture
def normalizer():
    return RawgNormalizer()


@pytest.fixture
def make_service(normalizer):
    """Builds a CatalogService over a FakeConnector."""

    def _make(handler, **kwargs):
        delay = kwargs.pop("delay", None)
        connector = FakeConnector(handler, delay=delay)
        service = CatalogService(connector, normalizer, API_KEY, **kwargs)
        return service, connector

    return _make


@pytest.fixture
def paged_games_handler():
    """Answers /games?page=N with two games whose ids encode the page."""

    def _handler(request: RequestDescriptor):
        page = int(query_of(request)["page"])
        return listing([raw_game(page * 100 + 1), raw_game(page * 100 + 2)])

    return _handler
