"""Coordinates bulk enrichment and per-selection detail loading."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Sequence

from ..models import CuratedEntry, EnrichedRecord
from ..state import ShelfState
from .details import DetailLoader
from .enrichment import EnrichmentOrchestrator

logger = logging.getLogger(__name__)


class TrackerService:
    """Owns the background tasks that feed :class:`ShelfState`."""

    def __init__(
        self,
        state: ShelfState,
        entries: Sequence[CuratedEntry],
        orchestrator: EnrichmentOrchestrator,
        detail_loader: DetailLoader,
    ):
        self.state = state
        self._entries = tuple(entries)
        self._orchestrator = orchestrator
        self._detail_loader = detail_loader
        self._enrichment_task: asyncio.Task[None] | None = None
        self._detail_tasks: list[asyncio.Task[None]] = []

    async def start(self) -> None:
        """Launch the one-off enrichment pass in the background."""

        if self._enrichment_task is None:
            self._enrichment_task = asyncio.create_task(self.refresh())

    async def stop(self) -> None:
        """Cancel background work still in flight."""

        tasks = [*self._detail_tasks]
        if self._enrichment_task is not None:
            tasks.append(self._enrichment_task)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task
        self._detail_tasks = []
        self._enrichment_task = None

    async def refresh(self) -> None:
        """Enrich every curated entry, then publish the full collection."""

        try:
            records = await self._orchestrator.enrich_all(self._entries)
        except Exception:
            logger.exception("Enrichment pass failed")
            raise
        self.state.replace_records(records)

    def select(self, catalog_id: str) -> EnrichedRecord:
        """Select a record and start loading its details.

        Raises ``KeyError`` when no record carries ``catalog_id``.
        """

        record = self.state.find_record(catalog_id)
        self._cancel_detail_tasks()
        token = self.state.select(record)
        self._detail_tasks = self._detail_loader.start(record, token)
        return record

    def close_selection(self) -> None:
        self._cancel_detail_tasks()
        self.state.close_selection()

    async def wait_for_details(self) -> None:
        """Wait until the current selection's lookups have settled."""

        if self._detail_tasks:
            await asyncio.gather(*self._detail_tasks, return_exceptions=True)

    def _cancel_detail_tasks(self) -> None:
        for task in self._detail_tasks:
            if not task.done():
                task.cancel()
        self._detail_tasks = []
