"""Pure sort and filter projections over the enriched collection."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Sequence

from .models import EnrichedRecord, SortKey, ViewState, WatchStatus
from .utils import coerce_number

WATCH_STATUS_PRIORITY: dict[str, int] = {
    WatchStatus.WATCHING.value: 0,
    WatchStatus.WATCHED.value: 1,
    WatchStatus.UNWATCHED.value: 2,
}
OTHER_STATUS_PRIORITY = len(WATCH_STATUS_PRIORITY)


def _title_key(record: EnrichedRecord) -> str:
    return (record.title or "").casefold()


def _rating_key(record: EnrichedRecord) -> tuple[float, str]:
    return (-coerce_number(record.overall_rating), _title_key(record))


def _watched_key(record: EnrichedRecord) -> tuple[int, str]:
    priority = WATCH_STATUS_PRIORITY.get(record.watch_status, OTHER_STATUS_PRIORITY)
    return (priority, _title_key(record))


def _watch_order_key(record: EnrichedRecord) -> tuple[float, str]:
    if record.watch_order is None:
        order = math.inf
    else:
        order = coerce_number(record.watch_order, default=math.inf)
    return (order, _title_key(record))


SORT_KEYS: dict[str, Callable[[EnrichedRecord], object]] = {
    "title": _title_key,
    "overallRating": _rating_key,
    "watched": _watched_key,
    "watchOrder": _watch_order_key,
}


def sort_records(
    records: Iterable[EnrichedRecord], sort_key: SortKey = "title"
) -> list[EnrichedRecord]:
    """Return a new list ordered by ``sort_key``; unknown keys keep input order."""

    key = SORT_KEYS.get(sort_key)
    if key is None:
        return list(records)
    return sorted(records, key=key)


def _search_fields(record: EnrichedRecord) -> tuple[str, ...]:
    return (
        record.title,
        record.year,
        record.watch_status,
        record.synopsis,
        record.favorite_character or "",
        record.notes or "",
    )


def matches_search(record: EnrichedRecord, search_text: str) -> bool:
    needle = (search_text or "").strip().casefold()
    if not needle:
        return True
    return any(needle in (field or "").casefold() for field in _search_fields(record))


def filter_records(
    records: Sequence[EnrichedRecord], search_text: str
) -> list[EnrichedRecord]:
    """Keep records whose searchable fields contain ``search_text``."""

    return [record for record in records if matches_search(record, search_text)]


def project(records: Iterable[EnrichedRecord], view: ViewState) -> list[EnrichedRecord]:
    """Sort, then filter, the enriched collection for the current view."""

    return filter_records(sort_records(records, view.sort_key), view.search_text)
