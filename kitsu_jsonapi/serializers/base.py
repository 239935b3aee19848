"""Base serializer for JSON:API request documents."""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping, get_args

from pydantic import BaseModel

from kitsu_jsonapi.config import JSONAPISettings, get_settings
from kitsu_jsonapi.core.document import JSONAPIDocumentBuilder
from kitsu_jsonapi.core.errors import ValidationError
from kitsu_jsonapi.schemas.resource import JSONAPIResourceIdentifier, ToMany, ToOne
from kitsu_jsonapi.utils.inflection import Inflector, wire_type

logger = logging.getLogger(__name__)

WRITE_METHODS = frozenset({"POST", "PATCH", "DELETE"})
ID_REQUIRED_METHODS = frozenset({"PATCH", "DELETE"})
RESERVED_MEMBERS = frozenset({"id", "type"})

_NOT_A_RELATIONSHIP = object()


def _relationship_fields(model: type[BaseModel]) -> dict[str, type[BaseModel]]:
    """Map fields annotated with ``ToOne``/``ToMany`` to that input class."""
    fields: dict[str, type[BaseModel]] = {}
    for name, field in model.model_fields.items():
        for candidate in get_args(field.annotation) or (field.annotation,):
            if isinstance(candidate, type) and issubclass(candidate, (ToOne, ToMany)):
                fields[name] = candidate
                break
    return fields


def _is_identifier(value: Any) -> bool:
    if isinstance(value, JSONAPIResourceIdentifier):
        return True
    return isinstance(value, Mapping) and "id" in value and "type" in value


class JSONAPISerializer:
    """Serialize application objects into JSON:API request documents.

    Keys of the input whose values are relationship inputs (``ToOne`` /
    ``ToMany``), registered in ``Meta.relationships``, or mappings carrying
    both ``id`` and ``type`` become relationship linkage; every other key
    except ``id`` and ``type`` becomes an attribute.
    """

    class Meta:
        """Serializer metadata (model name, type override, relationship keys)."""

        model: str = ""
        type_: str = ""
        relationships: dict[str, str] = {}

    def __init__(
        self,
        settings: JSONAPISettings | None = None,
        *,
        model: str | None = None,
        type_: str | None = None,
        relationships: Mapping[str, str] | None = None,
        inflector: Inflector | None = None,
    ) -> None:
        """Bind settings and optional per-instance overrides of ``Meta``."""
        self.settings = settings or get_settings()
        self.model = model or self.Meta.model
        self.type_ = type_ or self.Meta.type_
        self.relationships = dict(self.Meta.relationships)
        if relationships:
            self.relationships.update(relationships)
        self.inflector = inflector
        self.document_builder = JSONAPIDocumentBuilder()

    def serialize(self, instance: Any, *, method: str = "POST") -> dict[str, Any]:
        """Return the request document for ``instance``."""
        return self.document_builder.build_request(self.to_resource(instance, method=method))

    def to_resource(self, instance: Any, *, method: str = "POST") -> dict[str, Any]:
        """Serialize ``instance`` into a JSON:API resource object."""
        verb = self.normalize_method(method)
        values = self.get_values(instance, partial=verb == "PATCH")
        resource_id = self.get_id(values)
        if verb in ID_REQUIRED_METHODS and resource_id is None:
            raise ValidationError(f"{verb} requests require an id.", pointer="/data/id")

        resource: dict[str, Any] = {"type": self.get_type()}
        if resource_id is not None:
            resource["id"] = resource_id
        logger.debug("Serializing %s request for type %s", verb, resource["type"])
        if verb == "DELETE":
            return resource

        attributes, relationships = self.partition(values)
        if attributes:
            resource["attributes"] = attributes
        if relationships:
            resource["relationships"] = relationships
        return resource

    def get_type(self) -> str:
        """Return the wire ``type``: the override, else the inflected model name."""
        if self.type_:
            return self.type_
        if not self.model:
            raise ValidationError("A model name or type override is required.")
        return wire_type(self.model, self.settings, inflector=self.inflector)

    def get_values(self, instance: Any, *, partial: bool = False) -> dict[str, Any]:
        """Return the input's members in order.

        For pydantic models, ``partial`` keeps only explicitly set fields;
        otherwise unset fields are kept unless they are None.
        """
        if isinstance(instance, BaseModel):
            values: dict[str, Any] = {}
            linked = _relationship_fields(type(instance))
            for name in type(instance).model_fields:
                value = getattr(instance, name)
                is_set = name in instance.model_fields_set
                if (partial and not is_set) or (not is_set and value is None):
                    continue
                if value is None and name in linked:
                    value = linked[name]()
                values[name] = value
            return values
        if isinstance(instance, Mapping):
            return dict(instance)
        raise ValidationError(
            f"Cannot serialize {type(instance).__name__}; expected a mapping or a pydantic model."
        )

    def get_id(self, values: Mapping[str, Any]) -> str | None:
        """Return the resource id as a string, or None when absent."""
        value = values.get("id")
        if value is None or value == "":
            return None
        return str(value)

    def partition(
        self, values: Mapping[str, Any]
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Split input members into attributes and relationship objects."""
        attributes: dict[str, Any] = {}
        relationships: dict[str, Any] = {}
        for key, value in values.items():
            if key in RESERVED_MEMBERS:
                continue
            linkage = self.get_linkage(key, value)
            if linkage is _NOT_A_RELATIONSHIP:
                attributes[key] = self._attribute_value(value)
            else:
                relationships[key] = {"data": linkage}
        return attributes, relationships

    def get_linkage(self, key: str, value: Any) -> Any:
        """Return relationship linkage for ``value``, or a sentinel for attributes."""
        if isinstance(value, ToOne):
            return None if value.data is None else value.data.as_stub()
        if isinstance(value, ToMany):
            return [identifier.as_stub() for identifier in value.data]
        if key in self.relationships:
            return self._registered_linkage(key, self.relationships[key], value)
        if _is_identifier(value):
            return self._identifier(value, f"/{key}")
        if isinstance(value, (list, tuple)) and any(_is_identifier(item) for item in value):
            if not all(_is_identifier(item) for item in value):
                raise ValidationError(
                    "A list may not mix resource identifiers and other values.",
                    pointer=f"/{key}",
                )
            return [
                self._identifier(item, f"/{key}/{index}") for index, item in enumerate(value)
            ]
        return _NOT_A_RELATIONSHIP

    def _registered_linkage(self, key: str, target_type: str, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return [
                self._registered_identifier(item, target_type, f"/{key}/{index}")
                for index, item in enumerate(value)
            ]
        return self._registered_identifier(value, target_type, f"/{key}")

    def _registered_identifier(self, value: Any, target_type: str, pointer: str) -> dict[str, str]:
        if isinstance(value, JSONAPIResourceIdentifier):
            return value.as_stub()
        if isinstance(value, Mapping):
            return self._identifier({"type": target_type, **value}, pointer)
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return self._identifier({"id": value, "type": target_type}, pointer)
        raise ValidationError(
            f"Expected a resource identifier or id for relationship, got {type(value).__name__}.",
            pointer=pointer,
        )

    def _identifier(self, value: Any, pointer: str) -> dict[str, str]:
        if isinstance(value, JSONAPIResourceIdentifier):
            return value.as_stub()
        identifier_id = value.get("id")
        identifier_type = value.get("type")
        if identifier_id is None or identifier_id == "":
            raise ValidationError("Relationship identifiers require an id.", pointer=f"{pointer}/id")
        if not isinstance(identifier_type, str) or not identifier_type:
            raise ValidationError(
                "Relationship identifiers require a type.", pointer=f"{pointer}/type"
            )
        return {"id": str(identifier_id), "type": identifier_type}

    @staticmethod
    def _attribute_value(value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json")
        return copy.deepcopy(value)

    @staticmethod
    def normalize_method(method: str) -> str:
        """Return the upper-cased HTTP verb, rejecting non-write verbs."""
        verb = method.upper() if isinstance(method, str) else ""
        if verb not in WRITE_METHODS:
            raise ValidationError(f"Unsupported request method {method!r}.")
        return verb


def serialise(
    model: str,
    instance: Any,
    method: str = "POST",
    *,
    settings: JSONAPISettings | None = None,
    type_: str | None = None,
    relationships: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Serialise ``instance`` of ``model`` into a JSON:API request body."""
    serializer = JSONAPISerializer(
        settings, model=model, type_=type_, relationships=relationships
    )
    return serializer.serialize(instance, method=method)
