"""
Request descriptors for the RAWG endpoints the catalog uses.

Every path carries the API key in its query string. Query values are
URL-encoded, search text included.
"""
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from app.adapters.interfaces.connector import HttpMethod, RequestDescriptor

GAMES_PATH = "/games"
GENRES_PATH = "/genres"
PLATFORMS_PATH = "/platforms"


def _path(resource: str, api_key: str, params: Optional[Dict[str, Any]] = None) -> str:
    query = {"key": api_key}
    if params:
        query.update(params)
    return f"{resource}?{urlencode(query)}"


def games_page(api_key: str, page: int) -> RequestDescriptor:
    return RequestDescriptor(HttpMethod.GET, _path(GAMES_PATH, api_key, {"page": page}))


def games_search(api_key: str, name: str) -> RequestDescriptor:
    return RequestDescriptor(
        HttpMethod.GET,
        _path(GAMES_PATH, api_key, {"search": name}),
        {"name": name},
    )


def game_detail(api_key: str, game_id: int) -> RequestDescriptor:
    return RequestDescriptor(
        HttpMethod.GET,
        _path(f"{GAMES_PATH}/{int(game_id)}", api_key),
        {"videogameId": game_id},
    )


def genres(api_key: str) -> RequestDescriptor:
    return RequestDescriptor(HttpMethod.GET, _path(GENRES_PATH, api_key))


def platforms(api_key: str) -> RequestDescriptor:
    return RequestDescriptor(HttpMethod.GET, _path(PLATFORMS_PATH, api_key))
