"""Serialization of application objects into JSON:API request documents."""

from .base import JSONAPISerializer, serialise

__all__ = ["JSONAPISerializer", "serialise"]
