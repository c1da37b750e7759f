import asyncio
import dataclasses

import pytest

from app.core.exceptions import NormalizationError, SchemaValidationError, UpstreamTransportError
from app.domain.models.catalog import GameDetail, GameSearchResult, GameSummary

from conftest import API_KEY, listing, query_of, raw_game, raw_game_detail


@pytest.mark.asyncio
async def test_get_games_fetches_nine_pages_in_order(make_service, paged_games_handler):
    service, connector = make_service(paged_games_handler)

    games = await service.get_games()

    assert [query_of(request)["page"] for request in connector.requests] == [str(p) for p in range(1, 10)]
    assert set(connector.endpoints()) == {"/games"}
    assert connector.max_in_flight == 1
    assert [game.id for game in games] == [
        game_id for page in range(1, 10) for game_id in (page * 100 + 1, page * 100 + 2)
    ]
    assert all(isinstance(game, GameSummary) for game in games)


@pytest.mark.asyncio
async def test_get_games_maps_every_field(make_service):
    service, _ = make_service(lambda request: listing([raw_game(3498, "Grand Theft Auto V")]), page_count=1)

    [game] = await service.get_games()

    assert game == GameSummary(
        id=3498,
        name="Grand Theft Auto V",
        image="https://media.rawg.io/games/3498.jpg",
        genres=("Action", "RPG"),
        rating=4.5,
        platforms=("PC", "PlayStation 5"),
        release_date="2015-05-18",
    )


@pytest.mark.asyncio
async def test_get_games_fails_as_a_whole_when_a_page_fails(make_service, paged_games_handler):
    def handler(request):
        if query_of(request)["page"] == "5":
            raise UpstreamTransportError(upstream_status=503)
        return paged_games_handler(request)

    service, connector = make_service(handler)

    with pytest.raises(UpstreamTransportError) as exc_info:
        await service.get_games()

    assert exc_info.value.upstream_status == 503
    assert len(connector.requests) == 5


@pytest.mark.asyncio
async def test_concurrent_fetch_reassembles_pages_in_order(make_service, paged_games_handler):
    # Later pages answer first
    service, connector = make_service(
        paged_games_handler,
        concurrent_pages=True,
        delay=lambda request: 0.01 * (10 - int(query_of(request)["page"])),
    )

    games = await service.get_games()

    assert len(connector.requests) == 9
    assert connector.max_in_flight > 1
    assert [game.id for game in games][:4] == [101, 102, 201, 202]
    assert games[-1].id == 902


@pytest.mark.asyncio
async def test_concurrent_fetch_fails_as_a_whole(make_service, paged_games_handler):
    def handler(request):
        if query_of(request)["page"] == "9":
            raise UpstreamTransportError(upstream_status=500)
        return paged_games_handler(request)

    service, _ = make_service(handler, concurrent_pages=True)

    with pytest.raises(UpstreamTransportError):
        await service.get_games()


@pytest.mark.asyncio
async def test_concurrent_fetch_cancels_pending_pages_on_failure(make_service, paged_games_handler):
    def handler(request):
        if query_of(request)["page"] == "1":
            raise UpstreamTransportError(upstream_status=500)
        return paged_games_handler(request)

    service, connector = make_service(
        handler,
        concurrent_pages=True,
        delay=lambda request: 0 if query_of(request)["page"] == "1" else 0.05,
    )

    with pytest.raises(UpstreamTransportError):
        await service.get_games()

    assert connector.in_flight == 0
    await asyncio.sleep(0.1)
    assert connector.completed == 0


@pytest.mark.asyncio
async def test_page_count_is_configurable(make_service, paged_games_handler):
    service, connector = make_service(paged_games_handler, page_count=3)

    games = await service.get_games()

    assert len(connector.requests) == 3
    assert len(games) == 6


@pytest.mark.asyncio
async def test_every_request_carries_the_api_key(make_service, paged_games_handler):
    service, connector = make_service(paged_games_handler)

    await service.get_games()

    assert all(query_of(request)["key"] == API_KEY for request in connector.requests)


@pytest.mark.asyncio
async def test_get_games_rejects_drifted_schema(make_service):
    service, _ = make_service(
        lambda request: listing([raw_game(1), raw_game(2, rating="great")]),
        page_count=1,
    )

    with pytest.raises(SchemaValidationError) as exc_info:
        await service.get_games()

    assert exc_info.value.errors[0]["loc"] == (1, "rating")


@pytest.mark.asyncio
async def test_get_games_by_name_url_encodes_the_search_text(make_service):
    service, connector = make_service(lambda request: listing([raw_game(1, "Half-Life & Co")]))

    results = await service.get_games_by_name("half life & co")

    [request] = connector.requests
    assert "search=half+life+%26+co" in request.path
    assert query_of(request) == {"key": API_KEY, "search": "half life & co"}
    assert results == [
        GameSearchResult(
            id=1,
            name="Half-Life & Co",
            image="https://media.rawg.io/games/1.jpg",
            genres=("Action", "RPG"),
        )
    ]


@pytest.mark.asyncio
async def test_get_games_by_name_with_no_matches(make_service):
    service, _ = make_service(lambda request: listing([]))

    assert await service.get_games_by_name("zzzz") == []


@pytest.mark.asyncio
async def test_get_game_detail(make_service):
    service, connector = make_service(lambda request: raw_game_detail())

    game = await service.get_game_detail(3328)

    assert connector.endpoints() == ["/games/3328"]
    assert isinstance(game, GameDetail)
    assert game.description == "Hello world"
    assert game.total_reviews == 120
    assert game.stores == ("store.steampowered.com", "gog.com")
    assert game.platforms == ("PC", "PlayStation 5")


@pytest.mark.asyncio
async def test_get_game_detail_without_description_fails(make_service):
    service, _ = make_service(lambda request: raw_game_detail(description=None))

    with pytest.raises(NormalizationError):
        await service.get_game_detail(3328)


@pytest.mark.asyncio
async def test_get_game_detail_missing_field_fails_validation(make_service):
    payload = raw_game_detail()
    del payload["ratings_count"]
    service, _ = make_service(lambda request: payload)

    with pytest.raises(SchemaValidationError):
        await service.get_game_detail(3328)


@pytest.mark.asyncio
async def test_get_genres_returns_names_in_order(make_service):
    genres = [
        {"id": 4, "name": "Action", "slug": "action", "games_count": 180000},
        {"id": 51, "name": "Indie", "slug": "indie", "games_count": 60000},
        {"id": 3, "name": "Adventure", "slug": "adventure", "games_count": 140000},
    ]
    service, connector = make_service(lambda request: listing(genres))

    assert await service.get_genres() == ["Action", "Indie", "Adventure"]
    assert connector.endpoints() == ["/genres"]


@pytest.mark.asyncio
async def test_get_platforms_returns_names_in_order(make_service):
    platforms = [{"id": 4, "name": "PC"}, {"id": 187, "name": "PlayStation 5"}]
    service, connector = make_service(lambda request: listing(platforms))

    assert await service.get_platforms() == ["PC", "PlayStation 5"]
    assert connector.endpoints() == ["/platforms"]


@pytest.mark.asyncio
async def test_get_platforms_rejects_non_string_names(make_service):
    service, _ = make_service(lambda request: listing([{"id": 4, "name": 4}]))

    with pytest.raises(SchemaValidationError) as exc_info:
        await service.get_platforms()

    assert exc_info.value.schema == "PlatformList"


@pytest.mark.asyncio
async def test_transport_errors_propagate_unchanged(make_service):
    error = UpstreamTransportError(upstream_status=401)

    def handler(request):
        raise error

    service, _ = make_service(handler)

    with pytest.raises(UpstreamTransportError) as exc_info:
        await service.get_genres()

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_repeated_calls_yield_equal_entities(make_service):
    service, _ = make_service(lambda request: raw_game_detail())

    first = await service.get_game_detail(3328)
    second = await service.get_game_detail(3328)

    assert first == second
    assert first is not second
    with pytest.raises(dataclasses.FrozenInstanceError):
        first.name = "changed"


@pytest.mark.asyncio
async def test_repeated_listing_calls_yield_equal_games(make_service, paged_games_handler):
    service, _ = make_service(paged_games_handler, page_count=2)

    assert await service.get_games() == await service.get_games()


@pytest.mark.asyncio
async def test_repeated_genre_calls_yield_equal_names(make_service):
    service, _ = make_service(lambda request: listing([{"id": 4, "name": "Action"}, {"id": 3, "name": "Adventure"}]))

    assert await service.get_genres() == await service.get_genres() == ["Action", "Adventure"]
