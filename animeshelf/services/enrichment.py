"""Enrich curated entries with Kitsu catalog metadata."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Literal

import httpx

from ..matching import select_best_match
from ..models import (
    NO_SYNOPSIS,
    NOT_AVAILABLE,
    PLACEHOLDER_POSTER,
    PLACEHOLDER_THUMB,
    CuratedEntry,
    EnrichedRecord,
    WatchStatus,
)
from ..utils import error_catalog_id, fallback_catalog_id
from .kitsu import KitsuClient

logger = logging.getLogger(__name__)

EnrichmentMode = Literal["concurrent", "sequential"]


def _base_fields(entry: CuratedEntry) -> dict[str, Any]:
    fields = entry.model_dump()
    fields["watch_status"] = entry.watch_status or WatchStatus.UNWATCHED.value
    return fields


def _rank(value: Any) -> int | str:
    if isinstance(value, bool) or value is None:
        return NOT_AVAILABLE
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return NOT_AVAILABLE


def build_matched_record(entry: CuratedEntry, match: dict[str, Any]) -> EnrichedRecord:
    """Merge a Kitsu anime resource into the curated entry."""

    attributes = match.get("attributes") or {}
    poster = attributes.get("posterImage") or {}
    start_date = attributes.get("startDate")
    genre_link = (
        ((match.get("relationships") or {}).get("genres") or {}).get("links") or {}
    ).get("related")

    return EnrichedRecord(
        **_base_fields(entry),
        catalog_id=str(match.get("id") or fallback_catalog_id(entry.title)),
        synopsis=attributes.get("synopsis") or NO_SYNOPSIS,
        year=start_date[:4] if isinstance(start_date, str) and start_date else NOT_AVAILABLE,
        episode_count=_rank(attributes.get("episodeCount") or None),
        catalog_status=attributes.get("status") or NOT_AVAILABLE,
        poster_url=poster.get("large") or PLACEHOLDER_POSTER,
        poster_thumb_url=(
            poster.get("tiny")
            or poster.get("small")
            or poster.get("original")
            or PLACEHOLDER_THUMB
        ),
        genre_lookup_ref=genre_link or None,
        popularity_rank=_rank(attributes.get("popularityRank")),
        rating_rank=_rank(attributes.get("ratingRank")),
    )


def build_placeholder_record(entry: CuratedEntry, catalog_id: str) -> EnrichedRecord:
    """Return a record filled with "no data" sentinels."""

    return EnrichedRecord(**_base_fields(entry), catalog_id=catalog_id)


class RecordEnricher:
    """Resolves one curated entry to an enriched record; never raises."""

    def __init__(self, kitsu_client: KitsuClient):
        self._kitsu = kitsu_client

    async def enrich(self, entry: CuratedEntry) -> EnrichedRecord:
        try:
            candidates = await self._kitsu.search_anime(entry.title)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Kitsu search failed for %s: %s", entry.title, exc)
            return build_placeholder_record(entry, error_catalog_id(entry.title))

        if not candidates:
            logger.info("No Kitsu results for %s", entry.title)
            return build_placeholder_record(entry, fallback_catalog_id(entry.title))

        try:
            match = select_best_match(entry.title, candidates)
            if match is None:
                return build_placeholder_record(entry, fallback_catalog_id(entry.title))
            return build_matched_record(entry, match)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Unusable Kitsu result for %s: %s", entry.title, exc)
            return build_placeholder_record(entry, error_catalog_id(entry.title))


class EnrichmentOrchestrator:
    """Fans the record enricher out across the whole curated list."""

    def __init__(
        self,
        enricher: RecordEnricher,
        *,
        mode: EnrichmentMode = "concurrent",
        concurrency: int = 8,
        delay_seconds: float = 0.0,
    ):
        self._enricher = enricher
        self._mode = mode
        self._concurrency = max(1, concurrency)
        self._delay_seconds = max(0.0, delay_seconds)

    async def enrich_all(self, entries: Iterable[CuratedEntry]) -> list[EnrichedRecord]:
        """Return one enriched record per entry once every lookup has settled."""

        entries = list(entries)
        logger.info(
            "Enriching %d curated entries (%s mode)", len(entries), self._mode
        )
        if self._mode == "sequential":
            records = await self._enrich_sequentially(entries)
        else:
            records = await self._enrich_concurrently(entries)
        logger.info("Enrichment finished with %d records", len(records))
        return records

    async def _enrich_concurrently(
        self, entries: list[CuratedEntry]
    ) -> list[EnrichedRecord]:
        semaphore = asyncio.Semaphore(self._concurrency)

        async def _run(entry: CuratedEntry) -> EnrichedRecord:
            async with semaphore:
                return await self._enricher.enrich(entry)

        return list(await asyncio.gather(*(_run(entry) for entry in entries)))

    async def _enrich_sequentially(
        self, entries: list[CuratedEntry]
    ) -> list[EnrichedRecord]:
        records: list[EnrichedRecord] = []
        for index, entry in enumerate(entries):
            if index and self._delay_seconds:
                await asyncio.sleep(self._delay_seconds)
            records.append(await self._enricher.enrich(entry))
        return records
