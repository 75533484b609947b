"""Helper client for external and streaming links from Jikan (MyAnimeList)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable

import httpx

from ..exceptions import CatalogResponseError
from ..models import ExternalLink
from ..utils import is_streaming_site

logger = logging.getLogger(__name__)


class JikanClient:
    """Looks titles up on Jikan and collects their outbound links."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        streaming_services: Iterable[str] = (),
    ) -> None:
        self._client = http_client
        self._streaming_services = tuple(streaming_services)
        self._semaphore = asyncio.Semaphore(2)

    async def fetch_external_links(self, title: str) -> list[ExternalLink]:
        """Return streaming and external links for the best title match.

        Every link is kept; ``streaming`` only flags the ones whose site name
        contains a known streaming service.
        """

        normalized_title = (title or "").strip()
        if not normalized_title:
            return []

        payload = await self._get_json(
            "/anime", params={"q": normalized_title, "limit": 1}
        )
        results = self._data(payload)
        if not results:
            return []
        mal_id = results[0].get("mal_id")
        if mal_id is None:
            return []

        streaming_payload, external_payload = await asyncio.gather(
            self._get_json(f"/anime/{mal_id}/streaming"),
            self._get_json(f"/anime/{mal_id}/external"),
        )

        links: list[ExternalLink] = []
        for entry in [*self._data(streaming_payload), *self._data(external_payload)]:
            site = str(entry.get("name") or "").strip()
            url = str(entry.get("url") or "").strip()
            links.append(
                ExternalLink(
                    site=site,
                    url=url,
                    streaming=is_streaming_site(site, self._streaming_services),
                )
            )
        logger.debug("Jikan returned %d links for %r", len(links), normalized_title)
        return links

    async def _get_json(
        self, url: str, *, params: dict[str, Any] | None = None
    ) -> Any:
        async with self._semaphore:
            response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _data(payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, dict):
            raise CatalogResponseError("jikan", "expected a JSON object")
        data = payload.get("data")
        if not isinstance(data, list):
            raise CatalogResponseError("jikan", "response is missing a data array")
        return [entry for entry in data if isinstance(entry, dict)]
