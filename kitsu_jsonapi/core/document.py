"""JSON:API document construction for requests and response fixtures."""

from __future__ import annotations

import copy
from typing import Any, Iterable, Mapping


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 documents from resource objects."""

    def build_request(
        self,
        resource: Mapping[str, Any],
        *,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a request body wrapping a single resource object."""
        document: dict[str, Any] = {"data": copy.deepcopy(dict(resource))}
        if meta:
            document["meta"] = dict(meta)
        return document

    def build_single(
        self,
        resource: Mapping[str, Any] | None,
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a response document for a single (possibly empty) resource."""
        data = None if resource is None else copy.deepcopy(dict(resource))
        return self._with_members({"data": data}, included, links, meta)

    def echo(
        self,
        request: Mapping[str, Any],
        *,
        assigned_id: str | None = None,
        included: Iterable[Mapping[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Return the response a server sends back for an accepted request body.

        ``assigned_id`` stands in for a server-generated id on creation.
        """
        resource = copy.deepcopy(dict(request["data"]))
        if assigned_id is not None and resource.get("id") is None:
            resource["id"] = assigned_id
        return self.build_single(resource, included=included)

    @staticmethod
    def _with_members(
        document: dict[str, Any],
        included: Iterable[Mapping[str, Any]] | None,
        links: Mapping[str, Any] | None,
        meta: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        if included:
            document["included"] = [copy.deepcopy(dict(item)) for item in included]
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        return document
