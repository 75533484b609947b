"""Aggregate episode totals and status across a franchise."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..models import FranchiseInfo, FranchiseSeries
from ..utils import normalize_title
from .kitsu import KitsuClient

logger = logging.getLogger(__name__)

FRANCHISE_SUBTYPES = frozenset({"tv", "movie"})


def _member_titles(attributes: dict[str, Any]) -> list[str]:
    titles = [normalize_title(attributes.get("canonicalTitle"))]
    abbreviated = attributes.get("abbreviatedTitles") or []
    if isinstance(abbreviated, list):
        titles.extend(normalize_title(value) for value in abbreviated)
    localized = attributes.get("titles") or {}
    if isinstance(localized, dict):
        titles.extend(normalize_title(value) for value in localized.values())
    return [title for title in titles if title]


def _episode_count(attributes: dict[str, Any]) -> int:
    value = attributes.get("episodeCount")
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def _start_date(member: dict[str, Any]) -> str:
    value = member.get("startDate")
    return value if isinstance(value, str) else ""


def _franchise_status(members: Sequence[dict[str, Any]]) -> str | None:
    statuses = [member.get("status") for member in members]
    if "current" in statuses:
        return "current"
    if "upcoming" in statuses:
        return "upcoming"
    if not members:
        return None
    # ISO dates compare correctly as strings; missing dates sort first.
    latest = max(members, key=_start_date)
    return latest.get("status")


def aggregate_franchise(
    title: str, candidates: Sequence[dict[str, Any]]
) -> FranchiseInfo:
    """Combine the TV series and films whose titles contain ``title``."""

    query = normalize_title(title)
    members: list[dict[str, Any]] = []
    series_list: list[FranchiseSeries] = []
    for candidate in candidates:
        attributes = candidate.get("attributes") or candidate
        if not isinstance(attributes, dict):
            continue
        subtype = normalize_title(attributes.get("subtype"))
        if subtype not in FRANCHISE_SUBTYPES:
            continue
        if not any(query in member_title for member_title in _member_titles(attributes)):
            continue
        members.append(attributes)
        series_list.append(
            FranchiseSeries(
                id=str(candidate.get("id") or ""),
                title=str(attributes.get("canonicalTitle") or ""),
                episode_count=attributes.get("episodeCount"),
                status=attributes.get("status"),
                start_date=attributes.get("startDate"),
                subtype=attributes.get("subtype"),
            )
        )

    return FranchiseInfo(
        total_episodes=sum(_episode_count(member) for member in members),
        status=_franchise_status(members),
        series_list=series_list,
    )


class FranchiseAggregator:
    """Searches Kitsu for a title family and aggregates the results."""

    def __init__(self, kitsu_client: KitsuClient, *, search_limit: int = 20):
        self._kitsu = kitsu_client
        self._search_limit = search_limit

    async def aggregate(self, title: str) -> FranchiseInfo:
        """Return franchise totals for ``title``; transport errors propagate."""

        candidates = await self._kitsu.search_anime(title, limit=self._search_limit)
        info = aggregate_franchise(title, candidates)
        logger.debug(
            "Franchise for %r: %d members, %d episodes",
            title,
            len(info.series_list),
            info.total_episodes,
        )
        return info
