"""Pydantic schemas for JSON:API v1.1 documents and relationship inputs."""

from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


def _coerce_identifier(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class JSONAPIResourceIdentifier(BaseModel):
    """Resource identifier object: type + id."""

    type: str
    id: str
    meta: Optional[Dict[str, Any]] = None

    normalize_id = field_validator("id", mode="before")(_coerce_identifier)

    def as_stub(self) -> dict[str, str]:
        """Return the bare ``{"id", "type"}`` mapping used in object graphs."""
        return {"id": self.id, "type": self.type}


class JSONAPIRelationship(BaseModel):
    """Relationship object; ``data`` is absent for links-only relationships."""

    data: Union[JSONAPIResourceIdentifier, List[JSONAPIResourceIdentifier], None] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def has_linkage(self) -> bool:
        """Return True when the server sent a ``data`` member (even null)."""
        return "data" in self.model_fields_set


class JSONAPIResource(BaseModel):
    """Resource object with attributes and relationships."""

    type: str
    id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, JSONAPIRelationship]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    normalize_id = field_validator("id", mode="before")(_coerce_identifier)


class JSONAPIErrorObject(BaseModel):
    """JSON:API error object."""

    id: Optional[str] = None
    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    normalize_codes = field_validator("id", "status", "code", mode="before")(
        _coerce_identifier
    )

    def summary(self) -> str:
        """Return a one-line human readable description."""
        text = self.detail or self.title or self.code or "Unknown error"
        return f"{self.status} {text}" if self.status else text


class JSONAPIDocument(BaseModel):
    """Top-level JSON:API document."""

    data: Union[JSONAPIResource, List[JSONAPIResource], None] = None
    included: Optional[List[JSONAPIResource]] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    errors: Optional[List[JSONAPIErrorObject]] = None


class ToOne(BaseModel):
    """Explicit to-one relationship input; ``data=None`` clears the relationship."""

    kind: Literal["to-one"] = "to-one"
    data: Optional[JSONAPIResourceIdentifier] = None

    @classmethod
    def of(cls, type_: str, id_: Any) -> "ToOne":
        """Build a to-one linkage for ``(type_, id_)``."""
        return cls(data=JSONAPIResourceIdentifier(type=type_, id=id_))


class ToMany(BaseModel):
    """Explicit to-many relationship input; order is preserved on the wire."""

    kind: Literal["to-many"] = "to-many"
    data: List[JSONAPIResourceIdentifier] = Field(default_factory=list)

    @classmethod
    def of(cls, type_: str, ids: Iterable[Any]) -> "ToMany":
        """Build a to-many linkage of one resource type."""
        return cls(data=[JSONAPIResourceIdentifier(type=type_, id=id_) for id_ in ids])
