"""Tests for JSON:API query parameter encoding."""

import pytest

from kitsu_jsonapi.core.errors import ValidationError
from kitsu_jsonapi.utils.query_params import encode_query_params, iter_query_pairs


def test_sparse_fieldset_and_filter():
    """Nested maps become bracketed keys with percent-encoding."""
    query = encode_query_params(
        {"fields": {"users": "name,birthday"}, "filter": {"name": "wopian"}}
    )
    assert query == "fields%5Busers%5D=name%2Cbirthday&filter%5Bname%5D=wopian"


def test_output_follows_insertion_order():
    """Pairs are emitted in the order the keys were inserted."""
    params = {
        "sort": "-averageRating",
        "page": {"limit": 20, "offset": 40},
        "include": "categories",
    }
    assert list(iter_query_pairs(params)) == [
        ("sort", "-averageRating"),
        ("page[limit]", "20"),
        ("page[offset]", "40"),
        ("include", "categories"),
    ]


def test_encoding_is_deterministic():
    """Encoding the same parameters twice yields identical strings."""
    params = {"filter": {"text": "cowboy bebop", "genres": ["action", "space"]}}
    assert encode_query_params(params) == encode_query_params(params)
    assert encode_query_params(params) == (
        "filter%5Btext%5D=cowboy%20bebop&filter%5Bgenres%5D=action%2Cspace"
    )


def test_arrays_join_with_commas():
    """Arrays produce one comma-joined value instead of repeated keys."""
    query = encode_query_params({"include": ["categories", "mediaRelationships.destination"]})
    assert query == "include=categories%2CmediaRelationships.destination"


def test_empty_leaves_are_omitted():
    """None, empty strings, empty maps and empty arrays emit nothing."""
    params = {
        "filter": {"name": None, "slug": ""},
        "fields": {},
        "include": [],
        "page": {"limit": 5, "offset": 0},
    }
    assert encode_query_params(params) == "page%5Blimit%5D=5&page%5Boffset%5D=0"
    assert encode_query_params({}) == ""
    assert encode_query_params(None) == ""


def test_scalar_formatting():
    """Booleans are lower-case and deep nesting keeps every bracket."""
    assert encode_query_params({"filter": {"self": True}}) == "filter%5Bself%5D=true"
    assert (
        encode_query_params({"filter": {"rating": {"gte": 80}}})
        == "filter%5Brating%5D%5Bgte%5D=80"
    )


def test_nested_values_inside_arrays_are_rejected():
    """Arrays may only carry scalar members."""
    with pytest.raises(ValidationError) as excinfo:
        encode_query_params({"include": [{"categories": True}]})
    assert excinfo.value.pointer == "/include/0"


@pytest.mark.parametrize("value", [{"user", "anime"}, frozenset({"user"})])
def test_unordered_collections_are_rejected(value):
    """Sets have no stable order, so they cannot become a comma list."""
    with pytest.raises(ValidationError) as excinfo:
        encode_query_params({"fields": {"users": value}})
    assert excinfo.value.pointer == "/fields/users"


def test_sets_inside_arrays_are_rejected():
    """A set nested inside an array is not a scalar member."""
    with pytest.raises(ValidationError) as excinfo:
        encode_query_params({"include": ["user", frozenset({"anime"})]})
    assert excinfo.value.pointer == "/include/1"
