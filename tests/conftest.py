"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where
# ``animeshelf`` sits at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def kitsu_anime() -> Callable[..., dict[str, Any]]:
    """Return a builder for Kitsu JSON:API anime resources."""

    def build(
        anime_id: str,
        canonical_title: str,
        *,
        titles: dict[str, str] | None = None,
        abbreviated: list[str] | None = None,
        subtype: str = "TV",
        status: str = "finished",
        episode_count: int | None = 12,
        start_date: str | None = "2009-04-05",
        **attributes: Any,
    ) -> dict[str, Any]:
        return {
            "id": anime_id,
            "type": "anime",
            "attributes": {
                "canonicalTitle": canonical_title,
                "titles": titles or {"en": canonical_title},
                "abbreviatedTitles": abbreviated or [],
                "subtype": subtype,
                "status": status,
                "episodeCount": episode_count,
                "startDate": start_date,
                **attributes,
            },
            "relationships": {
                "genres": {
                    "links": {
                        "related": f"https://kitsu.example.com/api/edge/anime/{anime_id}/genres"
                    }
                }
            },
        }

    return build
