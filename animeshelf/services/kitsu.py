"""Utilities for communicating with the Kitsu JSON:API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..exceptions import CatalogResponseError, SyntheticCatalogIdError
from ..utils import is_synthetic_catalog_id

logger = logging.getLogger(__name__)

JSON_API_HEADERS = {"Accept": "application/vnd.api+json"}


class KitsuClient:
    """Thin wrapper around the Kitsu anime endpoints.

    Transport failures and non-2xx responses surface as ``httpx.HTTPError``;
    payloads without a ``data`` array raise :class:`CatalogResponseError`.
    Callers decide which of those are fatal.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self._client = http_client

    async def search_anime(
        self, title: str, *, limit: int | None = None
    ) -> list[dict[str, Any]]:
        """Return the raw candidate resources for a free-text title query."""

        params: dict[str, Any] = {"filter[text]": title}
        if limit is not None:
            params["page[limit]"] = limit
        logger.debug("Kitsu search for %r (limit=%s)", title, limit)
        payload = await self._get_json("/anime", params=params)
        return self._data(payload)

    async def fetch_genres(self, link: str) -> list[str]:
        """Resolve a genre relationship link into ordered genre names."""

        payload = await self._get_json(link)
        names: list[str] = []
        for genre in self._data(payload):
            name = self._attributes(genre).get("name")
            if name:
                names.append(str(name))
        return names

    async def fetch_streamers(self, catalog_id: str) -> list[str]:
        """Return the streaming site names Kitsu lists for an anime id."""

        if is_synthetic_catalog_id(catalog_id):
            raise SyntheticCatalogIdError(catalog_id)
        payload = await self._get_json(f"/anime/{catalog_id}/streamers")
        sites: list[str] = []
        for streamer in self._data(payload):
            site = self._attributes(streamer).get("siteName")
            if site:
                sites.append(str(site))
        return sites

    async def _get_json(
        self, url: str, *, params: dict[str, Any] | None = None
    ) -> Any:
        response = await self._client.get(url, params=params, headers=JSON_API_HEADERS)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _data(payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, dict):
            raise CatalogResponseError("kitsu", "expected a JSON object")
        data = payload.get("data")
        if not isinstance(data, list):
            raise CatalogResponseError("kitsu", "response is missing a data array")
        return [entry for entry in data if isinstance(entry, dict)]

    @staticmethod
    def _attributes(resource: dict[str, Any]) -> dict[str, Any]:
        attributes = resource.get("attributes")
        return attributes if isinstance(attributes, dict) else {}
