"""Title matching against Kitsu search candidates."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .utils import normalize_title

LOCALIZED_TITLE_KEYS: tuple[str, ...] = ("en", "en_jp", "ja_jp")


def candidate_titles(candidate: dict[str, Any]) -> Iterable[str]:
    """Yield the canonical, English, romanised and native titles of a candidate."""

    attributes = candidate.get("attributes") or candidate
    if not isinstance(attributes, dict):
        return
    yield normalize_title(attributes.get("canonicalTitle"))
    titles = attributes.get("titles") or {}
    if isinstance(titles, dict):
        for key in LOCALIZED_TITLE_KEYS:
            yield normalize_title(titles.get(key))


def select_best_match(
    title: str, candidates: Sequence[dict[str, Any]]
) -> dict[str, Any] | None:
    """Return the first exact title match, falling back to the first candidate.

    Only equality of normalised titles counts as a match; there is no scoring.
    When nothing matches exactly the catalog's own ranking is trusted and the
    first raw candidate is returned.
    """

    if not candidates:
        return None

    target = normalize_title(title)
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        if target and target in candidate_titles(candidate):
            return candidate
    return candidates[0]
