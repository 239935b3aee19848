"""Transform JSON:API documents to and from plain object graphs."""

from .client.builder import JSONAPIRequestBuilder, PreparedRequest
from .config import JSONAPISettings, get_settings
from .core.document import JSONAPIDocumentBuilder
from .core.errors import (
    DocumentError,
    JSONAPIClientError,
    JSONAPIDocumentException,
    NotAuthenticatedError,
    ResolutionGap,
    ValidationError,
)
from .deserializers.base import (
    DeserializedList,
    DeserializedResource,
    JSONAPIDeserializer,
    deserialise,
)
from .schemas.resource import ToMany, ToOne
from .serializers.base import JSONAPISerializer, serialise
from .utils.inflection import camelize, decamelize, pluralize, singularize
from .utils.query_params import encode_query_params

__all__ = [
    "DeserializedList",
    "DeserializedResource",
    "DocumentError",
    "JSONAPIClientError",
    "JSONAPIDeserializer",
    "JSONAPIDocumentBuilder",
    "JSONAPIDocumentException",
    "JSONAPIRequestBuilder",
    "JSONAPISerializer",
    "JSONAPISettings",
    "NotAuthenticatedError",
    "PreparedRequest",
    "ResolutionGap",
    "ToMany",
    "ToOne",
    "ValidationError",
    "camelize",
    "decamelize",
    "deserialise",
    "encode_query_params",
    "get_settings",
    "pluralize",
    "serialise",
    "singularize",
]
