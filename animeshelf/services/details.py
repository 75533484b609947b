"""Per-selection detail lookups (genres, links, streamers, franchise)."""

from __future__ import annotations

import asyncio
import logging

import httpx

from ..models import EnrichedRecord
from ..state import ShelfState
from .franchise import FranchiseAggregator
from .jikan import JikanClient
from .kitsu import KitsuClient

logger = logging.getLogger(__name__)

FRANCHISE_ERROR_MESSAGE = "Franchise information is unavailable right now."


class DetailLoader:
    """Runs the independent lookups behind the detail panel.

    Each lookup writes its own section into :class:`ShelfState` as soon as it
    resolves; there is no joint publish. Lookups that need a real Kitsu id
    resolve to empty values immediately for fallback and error records.
    """

    def __init__(
        self,
        state: ShelfState,
        kitsu_client: KitsuClient,
        jikan_client: JikanClient,
        franchise_aggregator: FranchiseAggregator,
    ):
        self._state = state
        self._kitsu = kitsu_client
        self._jikan = jikan_client
        self._franchise = franchise_aggregator

    def start(self, record: EnrichedRecord, token: int) -> list[asyncio.Task[None]]:
        """Schedule every lookup for ``record`` and return the running tasks."""

        return [
            asyncio.create_task(self._load_genres(record, token)),
            asyncio.create_task(self._load_external_links(record, token)),
            asyncio.create_task(self._load_streamers(record, token)),
            asyncio.create_task(self._load_franchise(record, token)),
        ]

    async def load(self, record: EnrichedRecord, token: int) -> None:
        """Run every lookup and wait until all of them have been applied."""

        await asyncio.gather(*self.start(record, token))

    async def _load_genres(self, record: EnrichedRecord, token: int) -> None:
        genres: list[str] = []
        if record.genre_lookup_ref and not record.is_synthetic:
            try:
                genres = await self._kitsu.fetch_genres(record.genre_lookup_ref)
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Genre lookup failed for %s: %s", record.title, exc)
        self._state.apply_detail(token, "genres", genres=genres)

    async def _load_external_links(self, record: EnrichedRecord, token: int) -> None:
        try:
            links = await self._jikan.fetch_external_links(record.title)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("External link lookup failed for %s: %s", record.title, exc)
            links = []
        self._state.apply_detail(token, "externalLinks", external_links=links)

    async def _load_streamers(self, record: EnrichedRecord, token: int) -> None:
        streamers: list[str] = []
        if not record.is_synthetic:
            try:
                streamers = await self._kitsu.fetch_streamers(record.catalog_id)
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Streamer lookup failed for %s: %s", record.title, exc)
        self._state.apply_detail(token, "streamers", streamers=streamers)

    async def _load_franchise(self, record: EnrichedRecord, token: int) -> None:
        try:
            info = await self._franchise.aggregate(record.title)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Franchise lookup failed for %s: %s", record.title, exc)
            self._state.apply_detail(
                token, "franchise", franchise_error=FRANCHISE_ERROR_MESSAGE
            )
            return
        self._state.apply_detail(token, "franchise", franchise_info=info)
