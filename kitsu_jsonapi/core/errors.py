"""Error types raised or returned by the JSON:API transformers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kitsu_jsonapi.schemas.resource import JSONAPIErrorObject


class JSONAPIClientError(Exception):
    """Base class for errors raised by this package."""


class ValidationError(JSONAPIClientError, ValueError):
    """Input that cannot be turned into a valid document or request.

    ``pointer`` is a JSON pointer to the offending member of the input, in
    the same form JSON:API error objects use for ``source.pointer``.
    """

    def __init__(self, message: str, *, pointer: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.pointer = pointer

    def __str__(self) -> str:
        if self.pointer:
            return f"{self.message} (at {self.pointer})"
        return self.message


class NotAuthenticatedError(JSONAPIClientError):
    """A write request was prepared without an Authorization header."""


class JSONAPIDocumentException(JSONAPIClientError):
    """Raised form of a :class:`DocumentError`."""

    def __init__(self, document_error: DocumentError) -> None:
        self.document_error = document_error
        summary = "; ".join(error.summary() for error in document_error.errors)
        super().__init__(summary or "JSON:API document contained errors")


class DocumentError(BaseModel):
    """Top-level ``errors`` of a response document, surfaced as a value."""

    model_config = ConfigDict(frozen=True)

    errors: list[JSONAPIErrorObject]
    meta: dict[str, Any] | None = None
    links: dict[str, Any] | None = None

    @property
    def first(self) -> JSONAPIErrorObject | None:
        """Return the first error object, if any."""
        return self.errors[0] if self.errors else None

    @property
    def statuses(self) -> list[str]:
        """Return the HTTP status codes reported by the error objects."""
        return [error.status for error in self.errors if error.status is not None]

    def raise_for_errors(self) -> None:
        """Raise :class:`JSONAPIDocumentException` for callers preferring exceptions."""
        raise JSONAPIDocumentException(self)


class ResolutionGap(BaseModel):
    """A relationship identifier with no matching resource in the document."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: str
    relationship: str
    source_type: str = Field(description="Type of the resource holding the linkage.")
    source_id: str | None = None
