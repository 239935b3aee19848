"""Name, query string and header helpers for JSON:API requests."""

from .content_negotiation import (
    JSONAPI_MEDIA_TYPE,
    build_headers,
    header_value,
    is_jsonapi_media_type,
    parse_jsonapi_media_type,
)
from .inflection import (
    Inflector,
    camelize,
    decamelize,
    model_name,
    pluralize,
    singularize,
    wire_type,
)
from .query_params import encode_query_params, iter_query_pairs

__all__ = [
    "JSONAPI_MEDIA_TYPE",
    "Inflector",
    "build_headers",
    "camelize",
    "decamelize",
    "encode_query_params",
    "header_value",
    "is_jsonapi_media_type",
    "iter_query_pairs",
    "model_name",
    "parse_jsonapi_media_type",
    "pluralize",
    "singularize",
    "wire_type",
]
