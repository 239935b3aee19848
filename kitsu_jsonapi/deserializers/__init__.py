"""Deserialization of JSON:API response documents."""

from .base import (
    DeserializedList,
    DeserializedResource,
    DeserializedResult,
    JSONAPIDeserializer,
    deserialise,
)

__all__ = [
    "DeserializedList",
    "DeserializedResource",
    "DeserializedResult",
    "JSONAPIDeserializer",
    "deserialise",
]
