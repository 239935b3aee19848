"""Core JSON:API document and error helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import (
    DocumentError,
    JSONAPIClientError,
    JSONAPIDocumentException,
    NotAuthenticatedError,
    ResolutionGap,
    ValidationError,
)

__all__ = [
    "DocumentError",
    "JSONAPIClientError",
    "JSONAPIDocumentBuilder",
    "JSONAPIDocumentException",
    "NotAuthenticatedError",
    "ResolutionGap",
    "ValidationError",
]
