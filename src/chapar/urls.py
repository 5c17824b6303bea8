"""URL construction for single and multi base-URL clients."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from .config import BaseUrlSpec, UrlSpec

# Characters `encodeURIComponent` leaves untouched besides alphanumerics.
_UNRESERVED = "-_.!~*'()"


def resolve_base_url(base_url: BaseUrlSpec | None, base_url_key: str | None = None) -> str:
    """Pick the base URL for a call; unknown keys degrade to an empty base."""

    if isinstance(base_url, str):
        return base_url
    if not base_url:
        return ""
    if base_url_key:
        return base_url.get(base_url_key) or ""
    return next(iter(base_url.values()), None) or ""


def stringify(value: Any) -> str:
    """Render a query value the way JavaScript's `String()` does.

    Booleans become `true`/`false`, integral floats drop the `.0`, and lists or
    tuples are comma-joined. Other values use `str()`.
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify(item) for item in value)
    return str(value)


def encode_component(value: Any) -> str:
    return quote(stringify(value), safe=_UNRESERVED)


def build_query(query_params: Mapping[str, Any] | None) -> str:
    """Serialize query parameters, skipping entries whose value is None."""

    pairs = [
        f"{encode_component(key)}={encode_component(value)}"
        for key, value in (query_params or {}).items()
        if value is not None
    ]
    return "&".join(pairs)


def build_url(
    base_url: BaseUrlSpec | None,
    url: str | UrlSpec,
    base_url_key: str | None = None,
) -> str:
    """Join the resolved base with a raw path or a structured `UrlSpec`.

    Slashes are not normalized; callers own well-formed segments.
    """

    base = resolve_base_url(base_url, base_url_key)
    if isinstance(url, str):
        return f"{base}/{url}"

    path = "/".join(stringify(part) for part in (url.path, *url.path_segments))
    query = build_query(url.query_params)
    if query:
        return f"{base}/{path}?{query}"
    return f"{base}/{path}"
