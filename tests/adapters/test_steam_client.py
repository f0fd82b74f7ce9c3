from __future__ import annotations

import asyncio
from collections.abc import Callable  # noqa: TC003
from dataclasses import replace

import httpx
import pytest

from questlog.adapters.steam import SteamClient, parse_steam_appid
from questlog.config import MissingConfigurationError, SteamConfig, get_steam_config
from questlog.domain.errors import NotFoundError, RequestError
from questlog.domain.model import SteamData
from questlog.domain.model.secondary import SteamReleaseDate
from tests.helpers.games import make_client_factory

APP_DETAILS = {
    "440": {
        "success": True,
        "data": {
            "name": "Team Fortress 2",
            "steam_appid": 440,
            "type": "game",
            "developers": ["Valve"],
            "publishers": ["Valve"],
            "release_date": {"coming_soon": False, "date": "10 Oct, 2007"},
            "metacritic": {"score": 92, "url": "https://www.metacritic.com/game/team-fortress-2"},
            "screenshots": [
                {"id": 0, "path_thumbnail": "thumb.jpg", "path_full": "full.jpg"},
            ],
        },
    }
}

REVIEWS = {
    "success": 1,
    "query_summary": {
        "total_positive": 900,
        "total_negative": 100,
        "total_reviews": 1000,
        "review_score_desc": "Very Positive",
    },
}

STORE_PAGE = """
<html><body>
  <div class="glance_tags popular_tags">
    <a class="app_tag">  Free to Play </a>
    <a class="app_tag">Hero Shooter</a>
    <a class="app_tag"></a>
  </div>
</body></html>
"""


def _config(**overrides: str) -> SteamConfig:
    config = get_steam_config()
    return replace(
        config,
        store=replace(config.store, cache=None),
        api_key=overrides.get("api_key"),
        user_id=overrides.get("user_id"),
    )


def _client(
    handler: Callable[[httpx.Request], httpx.Response], **overrides: str
) -> SteamClient:
    return SteamClient(config=_config(**overrides), client_factory=make_client_factory(handler))


def _store_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/api/appdetails":
        return httpx.Response(200, json=APP_DETAILS)
    if path == "/appreviews/440":
        return httpx.Response(200, json=REVIEWS)
    if path == "/app/440/":
        return httpx.Response(200, text=STORE_PAGE)
    return httpx.Response(404)


def test_parse_steam_appid() -> None:
    assert parse_steam_appid("https://store.steampowered.com/app/440/Team_Fortress_2/") == 440
    assert parse_steam_appid("https://example.com/app/440") is None


def test_get_steam_data_attaches_review_summary() -> None:
    steam_data = asyncio.run(_client(_store_handler).get_steam_data(440))

    assert isinstance(steam_data, SteamData)
    assert steam_data.name == "Team Fortress 2"
    assert steam_data.score is not None
    assert steam_data.score.review_score == 90
    assert steam_data.score.total_reviews == 1000
    assert steam_data.metacritic is not None
    assert steam_data.metacritic.score == 92


def test_get_steam_data_survives_missing_review_summary() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/appreviews"):
            return httpx.Response(500)
        return _store_handler(request)

    steam_data = asyncio.run(_client(handler).get_steam_data(440))

    assert steam_data.score is None


def test_get_app_details_sends_age_gate_cookie_and_language() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return _store_handler(request)

    asyncio.run(_client(handler).get_app_details(440))

    request = captured[0]
    assert request.url.params["appids"] == "440"
    assert request.url.params["l"] == "english"
    assert "birthtime=0" in request.headers.get("cookie", "")


def test_get_app_details_unknown_app_is_not_found() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"12": {"success": False}})

    with pytest.raises(NotFoundError):
        asyncio.run(_client(handler).get_app_details(12))


def test_release_timestamp_accepts_both_date_orders() -> None:
    steam_data = SteamData(
        name="Team Fortress 2", steam_appid=440, release_date=SteamReleaseDate(date="10 Oct, 2007")
    )
    us_style = SteamData(
        name="Team Fortress 2", steam_appid=440, release_date=SteamReleaseDate(date="Oct 10, 2007")
    )
    unparseable = SteamData(
        name="Team Fortress 2", steam_appid=440, release_date=SteamReleaseDate(date="Coming soon")
    )

    assert steam_data.release_timestamp() == 1192017600
    assert us_style.release_timestamp() == 1192017600
    assert unparseable.release_timestamp() is None


def test_scrape_user_tags_reads_glance_tags() -> None:
    tags = asyncio.run(_client(_store_handler).scrape_user_tags(440))

    assert tags == ["Free to Play", "Hero Shooter"]


def test_scrape_user_tags_maps_transport_errors() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(502)

    with pytest.raises(RequestError):
        asyncio.run(_client(handler).scrape_user_tags(440))


def test_get_owned_games_requires_credentials() -> None:
    with pytest.raises(MissingConfigurationError):
        asyncio.run(_client(_store_handler).get_owned_games())


def test_get_owned_games_returns_store_entries() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(
            200,
            json={
                "response": {
                    "game_count": 2,
                    "games": [
                        {"appid": 440, "name": "Team Fortress 2", "img_icon_url": "icon"},
                        {"appid": 620, "name": "Portal 2"},
                    ],
                }
            },
        )

    entries = asyncio.run(
        _client(handler, api_key="key", user_id="76561198000000000").get_owned_games()
    )

    assert [(entry.storefront_name, entry.id, entry.title) for entry in entries] == [
        ("steam", "440", "Team Fortress 2"),
        ("steam", "620", "Portal 2"),
    ]
    assert captured[0].url.host == "api.steampowered.com"
    assert captured[0].url.params["steamid"] == "76561198000000000"
