"""Pytest configuration and fixtures."""

import pytest

from kitsu_jsonapi.config import JSONAPISettings


@pytest.fixture
def settings():
    """Default transform settings with no environment influence."""
    return JSONAPISettings(
        decamelize=True,
        pluralize=True,
        base_url="https://example.org/api",
        headers={},
    )


@pytest.fixture
def auth_settings():
    """Settings carrying an Authorization header."""
    return JSONAPISettings(
        base_url="https://example.org/api/",
        headers={"Authorization": "Bearer 1234567890", "User-Agent": "tests/1.0"},
        timeout=5,
    )


@pytest.fixture
def anime_collection():
    """A compound collection document with included categories."""
    return {
        "data": [
            {
                "id": "1",
                "type": "anime",
                "attributes": {
                    "canonicalTitle": "Cowboy Bebop",
                    "titles": {"en": "Cowboy Bebop", "ja_jp": "カウボーイビバップ"},
                    "episodeCount": 26,
                },
                "relationships": {
                    "categories": {
                        "links": {"related": "https://kitsu.io/api/edge/anime/1/categories"},
                        "data": [
                            {"id": "10", "type": "categories"},
                            {"id": "11", "type": "categories"},
                        ],
                    },
                    "streamingLinks": {
                        "links": {"related": "https://kitsu.io/api/edge/anime/1/streaming-links"}
                    },
                    "castings": {"data": []},
                },
            },
            {
                "id": "2",
                "type": "anime",
                "attributes": {"canonicalTitle": "Trigun", "episodeCount": 26},
                "relationships": {
                    "categories": {"data": [{"id": "10", "type": "categories"}]},
                },
            },
        ],
        "included": [
            {"id": "10", "type": "categories", "attributes": {"title": "Space"}},
            {"id": "11", "type": "categories", "attributes": {"title": "Comedy"}},
        ],
        "meta": {"count": 2},
        "links": {
            "first": "https://kitsu.io/api/edge/anime?page%5Blimit%5D=2&page%5Boffset%5D=0",
            "next": "https://kitsu.io/api/edge/anime?page%5Blimit%5D=2&page%5Boffset%5D=2",
        },
    }


@pytest.fixture
def cyclic_document():
    """A user whose waifu character links back to the user."""
    return {
        "data": {
            "id": "1",
            "type": "users",
            "attributes": {"name": "wopian"},
            "relationships": {"waifu": {"data": {"id": "2", "type": "characters"}}},
        },
        "included": [
            {
                "id": "2",
                "type": "characters",
                "attributes": {"name": "Holo"},
                "relationships": {"favoritedBy": {"data": {"id": "1", "type": "users"}}},
            }
        ],
    }
