"""Utility helpers for the AnimeShelf service."""

from __future__ import annotations

import re
from typing import Any, Iterable


FALLBACK_ID_PREFIX = "fallback-"
ERROR_ID_PREFIX = "error-"

WHITESPACE_RE = re.compile(r"\s")


def normalize_title(value: Any) -> str:
    """Return a trimmed, case-folded title suitable for comparisons."""

    if value is None:
        return ""
    return str(value).strip().casefold()


def _title_token(title: str) -> str:
    return WHITESPACE_RE.sub("-", title)


def fallback_catalog_id(title: str) -> str:
    """Return the render key used when a search yields no candidates."""

    return f"{FALLBACK_ID_PREFIX}{_title_token(title)}"


def error_catalog_id(title: str) -> str:
    """Return the render key used when a search fails outright."""

    return f"{ERROR_ID_PREFIX}{_title_token(title)}"


def is_synthetic_catalog_id(catalog_id: str | None) -> bool:
    """Return ``True`` when ``catalog_id`` is not a real catalog identifier."""

    if not catalog_id:
        return True
    return catalog_id.startswith((FALLBACK_ID_PREFIX, ERROR_ID_PREFIX))


def is_streaming_site(site: str | None, services: Iterable[str]) -> bool:
    """Check whether a link's site name belongs to a known streaming service."""

    name = normalize_title(site)
    if not name:
        return False
    return any(service.casefold() in name for service in services)


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Convert loosely typed ratings/orders into floats."""

    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    # NaN never compares equal to itself.
    if number != number:
        return default
    return number
