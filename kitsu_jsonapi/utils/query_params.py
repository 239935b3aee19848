"""Helpers for JSON:API query parameter encoding."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping
from urllib.parse import quote

from kitsu_jsonapi.core.errors import ValidationError

logger = logging.getLogger(__name__)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value)


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _join_csv(values: list[Any] | tuple[Any, ...], path: list[str]) -> str:
    members: list[str] = []
    for index, item in enumerate(values):
        if _is_empty(item):
            continue
        if isinstance(item, (Mapping, list, tuple, set, frozenset)):
            raise ValidationError(
                "Query parameter arrays may only hold scalar values.",
                pointer="/" + "/".join([*path, str(index)]),
            )
        members.append(_format_scalar(item))
    return ",".join(members)


def iter_query_pairs(
    params: Mapping[str, Any], path: list[str] | None = None
) -> Iterator[tuple[str, str]]:
    """Yield ``(key, value)`` pairs in bracket notation, in input order."""
    path = path or []
    for key, value in params.items():
        current = [*path, str(key)]
        if _is_empty(value):
            continue
        if isinstance(value, Mapping):
            yield from iter_query_pairs(value, current)
            continue
        name = current[0] + "".join(f"[{part}]" for part in current[1:])
        if isinstance(value, (set, frozenset)):
            raise ValidationError(
                "Query parameter arrays must be ordered; use a list or tuple.",
                pointer="/" + "/".join(current),
            )
        if isinstance(value, (list, tuple)):
            joined = _join_csv(value, current)
            if joined:
                yield name, joined
        else:
            yield name, _format_scalar(value)


def encode_query_params(params: Mapping[str, Any] | None) -> str:
    """Encode nested JSON:API parameters (filter, fields, page, sort, include).

    ``{"filter": {"name": "wopian"}, "include": ["user", "anime"]}`` becomes
    ``filter%5Bname%5D=wopian&include=user%2Canime``.
    """
    if not params:
        return ""
    query = "&".join(
        f"{quote(key, safe='')}={quote(value, safe='')}"
        for key, value in iter_query_pairs(params)
    )
    logger.debug("Encoded query parameters: %s", query)
    return query
