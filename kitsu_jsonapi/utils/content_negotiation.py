"""Helpers for JSON:API content negotiation on the client side."""

from __future__ import annotations

from typing import Any, Mapping

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
IGNORED_PARAMETERS = frozenset({"charset"})


def _split_parameters(value: str) -> list[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _parse_param_value(value: str) -> list[str]:
    if value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    if not value:
        return []
    return value.split(" ")


def parse_jsonapi_media_type(content_type: str) -> dict[str, Any]:
    """Parse a media type and its JSON:API ``ext``/``profile`` parameters."""
    parts = _split_parameters(content_type or "")
    media_type = parts[0].lower() if parts else ""
    params: dict[str, Any] = {"media_type": media_type, "ext": [], "profile": []}

    for param in parts[1:]:
        if "=" not in param:
            continue
        name, raw_value = param.split("=", 1)
        name = name.strip().lower()
        raw_value = raw_value.strip()
        if name in {"ext", "profile"}:
            params[name] = _parse_param_value(raw_value)
        else:
            params.setdefault("other_params", {})[name] = raw_value
    return params


def is_jsonapi_media_type(content_type: str | None) -> bool:
    """Return True for ``application/vnd.api+json`` without foreign parameters.

    A ``charset`` parameter is ignored.
    """
    parsed = parse_jsonapi_media_type(content_type or "")
    foreign = {
        name for name in parsed.get("other_params", {}) if name not in IGNORED_PARAMETERS
    }
    return parsed["media_type"] == JSONAPI_MEDIA_TYPE and not foreign


def build_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header layers left to right, then enforce the JSON:API media type.

    Header names are matched case-insensitively; the last layer to set a
    name decides its value, while the first spelling of the name is kept.
    """
    merged: dict[str, str] = {}
    spelling: dict[str, str] = {}
    for layer in (*layers, {"Accept": JSONAPI_MEDIA_TYPE, "Content-Type": JSONAPI_MEDIA_TYPE}):
        for name, value in (layer or {}).items():
            lowered = name.lower()
            original = spelling.setdefault(lowered, name)
            merged[original] = value
    return merged


def header_value(headers: Mapping[str, str], name: str) -> str | None:
    """Look up a header case-insensitively."""
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None
