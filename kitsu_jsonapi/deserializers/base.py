"""Deserializer turning JSON:API documents into plain object graphs."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from kitsu_jsonapi.core.errors import DocumentError, ResolutionGap, ValidationError
from kitsu_jsonapi.schemas.resource import (
    JSONAPIDocument,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
)

logger = logging.getLogger(__name__)

ResourceKey = tuple[str, str]
RESERVED_MEMBERS = frozenset({"id", "type"})


class _SideChannels:
    """Document-level members kept beside, not inside, the resources."""

    meta: dict[str, Any]
    links: dict[str, Any]
    gaps: list[ResolutionGap]

    def _attach(
        self,
        meta: Mapping[str, Any] | None,
        links: Mapping[str, Any] | None,
        gaps: Iterable[ResolutionGap] | None,
    ) -> None:
        self.meta = dict(meta or {})
        self.links = dict(links or {})
        self.gaps = list(gaps or [])

    @property
    def complete(self) -> bool:
        """Return True when every relationship identifier was resolved."""
        return not self.gaps


class DeserializedResource(_SideChannels, dict):
    """A single primary resource; compares equal to a plain ``dict``."""

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        meta: Mapping[str, Any] | None = None,
        links: Mapping[str, Any] | None = None,
        gaps: Iterable[ResolutionGap] | None = None,
    ) -> None:
        dict.__init__(self, data or {})
        self._attach(meta, links, gaps)


class DeserializedList(_SideChannels, list):
    """Primary resources of a collection; compares equal to a plain ``list``."""

    def __init__(
        self,
        items: Iterable[dict[str, Any]] = (),
        *,
        meta: Mapping[str, Any] | None = None,
        links: Mapping[str, Any] | None = None,
        gaps: Iterable[ResolutionGap] | None = None,
    ) -> None:
        list.__init__(self, items)
        self._attach(meta, links, gaps)


DeserializedResult = Union[DeserializedResource, DeserializedList, DocumentError, None]


class _Resolution:
    """Per-document resolution state: the pool, finished nodes and open keys."""

    def __init__(self, pool: dict[ResourceKey, JSONAPIResource]) -> None:
        self.pool = pool
        self.built: dict[ResourceKey, dict[str, Any]] = {}
        self.in_progress: set[ResourceKey] = set()
        self.gaps: list[ResolutionGap] = []


class JSONAPIDeserializer:
    """Resolve JSON:API documents into dictionaries with relationships inlined.

    Relationship linkage is looked up in a pool of the document's resources
    keyed by ``(type, id)``: primary data first, then ``included``, the first
    occurrence of a key winning. Resolved targets replace the relationship
    member in place; identifiers without a match become ``{"id", "type"}``
    stubs and are reported as :class:`ResolutionGap` records on the result.
    A target already being materialised higher up the current chain is also
    emitted as a stub, so cyclic linkage terminates.

    Each ``(type, id)`` is materialised at most once per document; every
    relationship pointing at it shares the same node.
    """

    def __init__(self, *, keep_type: bool = False) -> None:
        """Configure whether materialised resources retain their wire ``type``."""
        self.keep_type = keep_type

    def deserialize(
        self, document: Mapping[str, Any], *, many: bool | None = None
    ) -> DeserializedResult:
        """Return the object graph for ``document``.

        ``many`` is the request shape hint used when ``data`` is null: a
        to-many request yields an empty list instead of ``None``.
        """
        parsed = self.parse_document(document)
        if parsed.errors:
            if parsed.data is not None:
                logger.warning("Document carries both data and errors; ignoring data")
            return DocumentError(errors=parsed.errors, meta=parsed.meta, links=parsed.links)

        if parsed.data is None:
            if many:
                return DeserializedList(meta=parsed.meta, links=parsed.links)
            return None

        resolution = _Resolution(self.build_pool(parsed))
        if isinstance(parsed.data, list):
            items = [self._materialize(resource, resolution) for resource in parsed.data]
            result: DeserializedResource | DeserializedList = DeserializedList(
                items, meta=parsed.meta, links=parsed.links, gaps=resolution.gaps
            )
        else:
            result = DeserializedResource(
                self._materialize(parsed.data, resolution),
                meta=parsed.meta,
                links=parsed.links,
                gaps=resolution.gaps,
            )
        if resolution.gaps:
            logger.debug(
                "Document resolved with %d unresolved relationship identifiers",
                len(resolution.gaps),
            )
        return result

    def parse_document(self, document: Mapping[str, Any]) -> JSONAPIDocument:
        """Validate the raw document against the wire schema."""
        if not isinstance(document, Mapping):
            raise ValidationError("A JSON:API document must be a JSON object.", pointer="")
        try:
            return JSONAPIDocument.model_validate(document)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            pointer = "/" + "/".join(str(part) for part in first["loc"])
            raise ValidationError(
                f"Malformed JSON:API document: {first['msg']}", pointer=pointer
            ) from exc

    def build_pool(self, document: JSONAPIDocument) -> dict[ResourceKey, JSONAPIResource]:
        """Index every identifiable resource of the document by ``(type, id)``."""
        primary = document.data if isinstance(document.data, list) else [document.data]
        pool: dict[ResourceKey, JSONAPIResource] = {}
        for resource in [*primary, *(document.included or [])]:
            if resource is None or resource.id is None:
                continue
            key = (resource.type, resource.id)
            if key in pool:
                logger.warning(
                    "Duplicate resource %s/%s in document; keeping the first occurrence",
                    resource.type,
                    resource.id,
                )
                continue
            pool[key] = resource
        return pool

    def _materialize(self, resource: JSONAPIResource, resolution: _Resolution) -> dict[str, Any]:
        key = (resource.type, resource.id) if resource.id is not None else None
        if key is not None and key in resolution.built:
            return resolution.built[key]

        node: dict[str, Any] = {
            name: copy.deepcopy(value)
            for name, value in (resource.attributes or {}).items()
            if name not in RESERVED_MEMBERS
        }
        if resource.id is not None:
            node["id"] = resource.id
        if self.keep_type:
            node["type"] = resource.type

        if key is not None:
            resolution.in_progress.add(key)
        for name, relationship in (resource.relationships or {}).items():
            if not relationship.has_linkage:
                continue
            linkage = relationship.data
            if isinstance(linkage, list):
                node[name] = [
                    self._resolve(resource, name, identifier, resolution)
                    for identifier in linkage
                ]
            elif linkage is None:
                node[name] = None
            else:
                node[name] = self._resolve(resource, name, linkage, resolution)
        if key is not None:
            resolution.in_progress.discard(key)
            resolution.built[key] = node
        return node

    def _resolve(
        self,
        owner: JSONAPIResource,
        relationship: str,
        identifier: JSONAPIResourceIdentifier,
        resolution: _Resolution,
    ) -> dict[str, Any]:
        key = (identifier.type, identifier.id)
        target = resolution.pool.get(key)
        if target is None:
            resolution.gaps.append(
                ResolutionGap(
                    type=identifier.type,
                    id=identifier.id,
                    relationship=relationship,
                    source_type=owner.type,
                    source_id=owner.id,
                )
            )
            logger.debug(
                "No included resource for %s/%s (%s.%s)",
                identifier.type,
                identifier.id,
                owner.type,
                relationship,
            )
            return identifier.as_stub()
        if key in resolution.in_progress:
            logger.debug("Cycle through %s/%s; emitting a stub", identifier.type, identifier.id)
            return identifier.as_stub()
        if key in resolution.built:
            return resolution.built[key]
        return self._materialize(target, resolution)


def deserialise(
    document: Mapping[str, Any],
    *,
    many: bool | None = None,
    keep_type: bool = False,
) -> DeserializedResult:
    """Deserialise a JSON:API response document into a plain object graph."""
    return JSONAPIDeserializer(keep_type=keep_type).deserialize(document, many=many)
