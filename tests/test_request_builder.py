"""Tests for preparing JSON:API requests."""

import pytest

from kitsu_jsonapi.client.builder import JSONAPIRequestBuilder
from kitsu_jsonapi.core.errors import NotAuthenticatedError, ValidationError
from kitsu_jsonapi.utils.content_negotiation import JSONAPI_MEDIA_TYPE


def test_get_collection(settings):
    """Model names become pluralised, hyphenated paths with encoded queries."""
    request = JSONAPIRequestBuilder(settings).get(
        "libraryEntries", {"filter": {"userId": 42}, "page": {"limit": 5}}
    )
    assert request.method == "GET"
    assert request.path == "library-entries"
    assert request.url == (
        "https://example.org/api/library-entries?filter%5BuserId%5D=42&page%5Blimit%5D=5"
    )
    assert request.many is True
    assert request.json_body is None
    assert request.headers["Accept"] == JSONAPI_MEDIA_TYPE
    assert request.headers["Content-Type"] == JSONAPI_MEDIA_TYPE


def test_get_single_and_related_paths(settings):
    """Sub-paths are kept and drive the response shape hint."""
    builder = JSONAPIRequestBuilder(settings)
    single = builder.get("anime/2", {"include": "categories"})
    assert single.path == "anime/2"
    assert single.query == "include=categories"
    assert single.many is False
    related = builder.get("anime/2/categories")
    assert related.url == "https://example.org/api/anime/2/categories"
    assert related.many is None


def test_writes_require_authorization(settings):
    """POST, PATCH and DELETE refuse to run without an Authorization header."""
    builder = JSONAPIRequestBuilder(settings)
    assert not builder.is_authenticated
    with pytest.raises(NotAuthenticatedError):
        builder.post("post", {"content": "Hello World"})
    with pytest.raises(NotAuthenticatedError):
        builder.delete("post", 1)

    builder.headers["Authorization"] = "Bearer token"
    assert builder.is_authenticated
    assert builder.post("post", {"content": "Hello World"}).method == "POST"


def test_post_body_and_headers(auth_settings):
    """Creation requests carry the serialised body and merged headers."""
    request = JSONAPIRequestBuilder(auth_settings).post(
        "posts",
        {"content": "Hello World", "user": {"id": "42603", "type": "users"}},
        headers={"X-Request-Id": "abc"},
    )
    assert request.url == "https://example.org/api/posts"
    assert request.timeout == 5
    assert request.headers == {
        "Authorization": "Bearer 1234567890",
        "User-Agent": "tests/1.0",
        "X-Request-Id": "abc",
        "Accept": JSONAPI_MEDIA_TYPE,
        "Content-Type": JSONAPI_MEDIA_TYPE,
    }
    assert request.json_body == {
        "data": {
            "type": "posts",
            "attributes": {"content": "Hello World"},
            "relationships": {"user": {"data": {"id": "42603", "type": "users"}}},
        }
    }


def test_patch_and_delete_paths(auth_settings):
    """Updates and removals address the resource by id."""
    builder = JSONAPIRequestBuilder(auth_settings)
    patch = builder.patch("post", {"id": 12345678, "content": "Goodbye World"})
    assert patch.method == "PATCH"
    assert patch.path == "posts/12345678"
    assert patch.json_body["data"]["id"] == "12345678"

    delete = builder.delete("posts", 123)
    assert delete.path == "posts/123"
    assert delete.json_body == {"data": {"type": "posts", "id": "123"}}


def test_patch_without_id(auth_settings):
    """Updating without an id is a usage error."""
    with pytest.raises(ValidationError):
        JSONAPIRequestBuilder(auth_settings).patch("post", {"content": "Goodbye World"})


def test_self_filters_on_authenticated_user(auth_settings):
    """self_ fetches users with filter[self]=true ahead of caller params."""
    request = JSONAPIRequestBuilder(auth_settings).self_({"fields": {"users": "name,birthday"}})
    assert request.path == "users"
    assert request.query == "filter%5Bself%5D=true&fields%5Busers%5D=name%2Cbirthday"
    assert request.first is True
    assert request.many is True


def test_parse_response_uses_request_shape(settings):
    """The prepared request's shape hint decides how null data is returned."""
    builder = JSONAPIRequestBuilder(settings)
    collection = builder.get("anime")
    assert builder.parse_response({"data": None}, request=collection) == []
    assert builder.parse_response({"data": None}, request=builder.get("anime/1")) is None


def test_parse_response_checks_content_type(settings, cyclic_document):
    """Bodies served with a foreign media type are rejected."""
    builder = JSONAPIRequestBuilder(settings)
    with pytest.raises(ValidationError):
        builder.parse_response(cyclic_document, content_type="text/html")
    result = builder.parse_response(cyclic_document, content_type=JSONAPI_MEDIA_TYPE)
    assert result["waifu"]["name"] == "Holo"


def test_self_response_unwraps_to_the_user(auth_settings):
    """A self_ response yields the single user with the document side channels."""
    builder = JSONAPIRequestBuilder(auth_settings)
    body = {
        "data": [{"id": "42603", "type": "users", "attributes": {"name": "wopian"}}],
        "meta": {"count": 1},
    }
    user = builder.parse_response(body, request=builder.self_())
    assert user == {"id": "42603", "name": "wopian"}
    assert user.meta == {"count": 1}
    assert builder.parse_self(body) == {"id": "42603", "name": "wopian"}


def test_self_response_without_match_is_none(auth_settings):
    """An empty or null self_ collection means no user."""
    builder = JSONAPIRequestBuilder(auth_settings)
    request = builder.self_()
    assert builder.parse_response({"data": []}, request=request) is None
    assert builder.parse_response({"data": None}, request=request) is None
    assert builder.parse_self({"data": []}) is None


def test_plain_collections_are_not_unwrapped(settings):
    """Only requests that ask for it are reduced to their first resource."""
    builder = JSONAPIRequestBuilder(settings)
    body = {"data": [{"id": "1", "type": "anime"}, {"id": "2", "type": "anime"}]}
    assert builder.get("anime").first is False
    assert builder.parse_response(body, request=builder.get("anime")) == [{"id": "1"}, {"id": "2"}]
    assert builder.parse_response(body, first=True) == {"id": "1"}


def test_verb_aliases(auth_settings):
    """fetch, create, update and remove prepare the same requests as the verbs."""
    builder = JSONAPIRequestBuilder(auth_settings)
    assert builder.fetch("anime", {"page": {"limit": 2}}) == builder.get(
        "anime", {"page": {"limit": 2}}
    )
    assert builder.create("posts", {"content": "Hi"}) == builder.post("posts", {"content": "Hi"})
    assert builder.update("posts", {"id": 1, "content": "Bye"}).method == "PATCH"
    assert builder.remove("posts", 1).path == "posts/1"


def test_parse_response_accepts_charset(settings, cyclic_document):
    """A charset parameter on the JSON:API media type is accepted."""
    builder = JSONAPIRequestBuilder(settings)
    result = builder.parse_response(
        cyclic_document, content_type="application/vnd.api+json; charset=utf-8"
    )
    assert result["waifu"]["name"] == "Holo"
    with pytest.raises(ValidationError):
        builder.parse_response(cyclic_document, content_type="application/vnd.api+json; v=2")
