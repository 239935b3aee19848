"""Build transport-ready JSON:API requests without performing any I/O."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

from pydantic import BaseModel, Field

from kitsu_jsonapi.config import JSONAPISettings, get_settings
from kitsu_jsonapi.core.errors import NotAuthenticatedError, ValidationError
from kitsu_jsonapi.deserializers.base import (
    DeserializedList,
    DeserializedResource,
    DeserializedResult,
    JSONAPIDeserializer,
)
from kitsu_jsonapi.serializers.base import JSONAPISerializer
from kitsu_jsonapi.utils.content_negotiation import (
    build_headers,
    header_value,
    is_jsonapi_media_type,
)
from kitsu_jsonapi.utils.inflection import Inflector, wire_type
from kitsu_jsonapi.utils.query_params import encode_query_params

logger = logging.getLogger(__name__)


class PreparedRequest(BaseModel):
    """Everything a transport needs to send one JSON:API request."""

    method: str
    url: str
    path: str
    query: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    json_body: Optional[dict[str, Any]] = None
    timeout: float
    many: Optional[bool] = Field(
        default=None,
        description="Expected response shape: collection, single resource, or unknown.",
    )
    first: bool = Field(
        default=False,
        description="Unwrap the first resource of a collection response.",
    )


class JSONAPIRequestBuilder:
    """Prepare GET/POST/PATCH/DELETE requests for a JSON:API server.

    Paths, query strings, headers and bodies are built from the settings the
    builder holds; sending them and handing the parsed body back to
    :meth:`parse_response` is up to the caller's HTTP client.
    """

    def __init__(
        self,
        settings: JSONAPISettings | None = None,
        *,
        inflector: Inflector | None = None,
        keep_type: bool = False,
    ) -> None:
        self.settings = settings or get_settings()
        self.inflector = inflector
        self.headers: dict[str, str] = dict(self.settings.headers)
        self.deserializer = JSONAPIDeserializer(keep_type=keep_type)

    @property
    def is_authenticated(self) -> bool:
        """Return True when an Authorization header is configured."""
        return bool(header_value(self.headers, "Authorization"))

    def resource_path(self, model: str, resource_id: Any = None) -> str:
        """Return ``library-entries`` for ``libraryEntries`` (plus any sub-path)."""
        head, _, rest = model.strip("/").partition("/")
        segments = [wire_type(head, self.settings, inflector=self.inflector)]
        if rest:
            segments.append(rest)
        if resource_id is not None:
            segments.append(quote(str(resource_id), safe=""))
        return "/".join(segments)

    def get(
        self,
        model: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> PreparedRequest:
        """Prepare a fetch of a collection, a resource or a related sub-path."""
        sub_path = model.strip("/").split("/")[1:]
        many = None
        if not sub_path:
            many = True
        elif len(sub_path) == 1:
            many = False
        return self._prepare(
            "GET",
            self.resource_path(model),
            query=encode_query_params(params),
            headers=build_headers(self.headers, headers),
            many=many,
        )

    def post(
        self,
        model: str,
        body: Any,
        headers: Mapping[str, str] | None = None,
    ) -> PreparedRequest:
        """Prepare the creation of a resource."""
        merged = self._write_headers(headers)
        payload = self._serializer(model).serialize(body, method="POST")
        return self._prepare(
            "POST", self.resource_path(model), headers=merged, json_body=payload, many=False
        )

    def patch(
        self,
        model: str,
        body: Any,
        headers: Mapping[str, str] | None = None,
    ) -> PreparedRequest:
        """Prepare a partial update; ``body`` must carry the resource id."""
        merged = self._write_headers(headers)
        payload = self._serializer(model).serialize(body, method="PATCH")
        return self._prepare(
            "PATCH",
            self.resource_path(model, payload["data"]["id"]),
            headers=merged,
            json_body=payload,
            many=False,
        )

    def delete(
        self,
        model: str,
        resource_id: Any,
        headers: Mapping[str, str] | None = None,
    ) -> PreparedRequest:
        """Prepare the removal of a resource by id."""
        merged = self._write_headers(headers)
        payload = self._serializer(model).serialize({"id": resource_id}, method="DELETE")
        return self._prepare(
            "DELETE",
            self.resource_path(model, payload["data"]["id"]),
            headers=merged,
            json_body=payload,
            many=False,
        )

    def self_(
        self,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> PreparedRequest:
        """Prepare a fetch of the authenticated user (``filter[self]=true``).

        The server answers with a one-element collection; :meth:`parse_response`
        unwraps it to that user (or None) for requests prepared here.
        """
        extra = dict(params or {})
        filters = {"self": True, **dict(extra.pop("filter", None) or {})}
        request = self.get("users", {"filter": filters, **extra}, headers)
        return request.model_copy(update={"first": True})

    def parse_response(
        self,
        body: Mapping[str, Any],
        *,
        content_type: str | None = None,
        request: PreparedRequest | None = None,
        many: bool | None = None,
        first: bool | None = None,
    ) -> DeserializedResult:
        """Deserialize a response body, using the request's shape hints if given.

        With ``first`` a collection result is reduced to its first resource,
        which keeps the collection's ``meta``, ``links`` and ``gaps``.
        """
        if content_type is not None and not is_jsonapi_media_type(content_type):
            raise ValidationError(f"Unexpected response content type {content_type!r}.")
        if request is not None:
            if many is None:
                many = request.many
            if first is None:
                first = request.first
        result = self.deserializer.deserialize(body, many=many)
        if first and isinstance(result, DeserializedList):
            return self._first(result)
        return result

    def parse_self(
        self, body: Mapping[str, Any], *, content_type: str | None = None
    ) -> DeserializedResult:
        """Return the authenticated user from a :meth:`self_` response body."""
        return self.parse_response(body, content_type=content_type, many=True, first=True)

    @staticmethod
    def _first(result: DeserializedList) -> DeserializedResource | None:
        if not result:
            return None
        return DeserializedResource(
            result[0], meta=result.meta, links=result.links, gaps=result.gaps
        )

    def _serializer(self, model: str) -> JSONAPISerializer:
        head = model.strip("/").split("/")[0]
        return JSONAPISerializer(self.settings, model=head, inflector=self.inflector)

    def _write_headers(self, headers: Mapping[str, str] | None) -> dict[str, str]:
        merged = build_headers(self.headers, headers)
        if not header_value(merged, "Authorization"):
            raise NotAuthenticatedError("Not logged in")
        return merged

    def _prepare(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str],
        query: str = "",
        json_body: dict[str, Any] | None = None,
        many: bool | None = None,
    ) -> PreparedRequest:
        url = f"{self.settings.base_url.rstrip('/')}/{path}"
        if query:
            url = f"{url}?{query}"
        logger.debug("Prepared %s %s", method, url)
        return PreparedRequest(
            method=method,
            url=url,
            path=path,
            query=query,
            headers=headers,
            json_body=json_body,
            timeout=self.settings.timeout,
            many=many,
        )

    fetch = get
    create = post
    update = patch
    remove = delete
