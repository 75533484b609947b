"""Pydantic models describing curated entries and their enriched views."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .utils import is_synthetic_catalog_id


NO_SYNOPSIS = "No synopsis available."
NOT_AVAILABLE = "N/A"
PLACEHOLDER_POSTER = "https://via.placeholder.com/300?text=No+Image"
PLACEHOLDER_THUMB = "https://via.placeholder.com/64?text=No+Image"

SortKey = Literal["title", "overallRating", "watched", "watchOrder"]
ViewMode = Literal["tiles", "list"]
Rating = float | str | None
Rank = int | Literal["N/A"]


class WatchStatus(str, Enum):
    WATCHING = "Watching"
    WATCHED = "Watched"
    UNWATCHED = "Unwatched"


class CuratedEntry(BaseModel):
    """A single hand-curated row from the static anime list."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str
    watch_status: str | None = Field(default=None, alias="watchStatus")
    watch_order: float | None = Field(default=None, alias="watchOrder")
    overall_rating: Rating = Field(default=None, alias="overallRating")
    story_rating: Rating = Field(default=None, alias="storyRating")
    animation_visuals_rating: Rating = Field(
        default=None, alias="animationVisualsRating"
    )
    pacing: str | None = None
    favorite_character: str | None = Field(default=None, alias="favoriteCharacter")
    favorite_part: str | None = Field(default=None, alias="favoritePart")
    notes: str | None = None


class EnrichedRecord(CuratedEntry):
    """Curated entry merged with metadata from the catalog search."""

    watch_status: str = Field(default=WatchStatus.UNWATCHED.value, alias="watchStatus")
    catalog_id: str = Field(alias="catalogId", min_length=1)
    synopsis: str = NO_SYNOPSIS
    year: str = NOT_AVAILABLE
    episode_count: Rank = Field(default=NOT_AVAILABLE, alias="episodeCount")
    catalog_status: str = Field(default=NOT_AVAILABLE, alias="catalogStatus")
    poster_url: str = Field(default=PLACEHOLDER_POSTER, alias="posterUrl")
    poster_thumb_url: str = Field(default=PLACEHOLDER_THUMB, alias="posterThumbUrl")
    genre_lookup_ref: str | None = Field(default=None, alias="genreLookupRef")
    popularity_rank: Rank = Field(default=NOT_AVAILABLE, alias="popularityRank")
    rating_rank: Rank = Field(default=NOT_AVAILABLE, alias="ratingRank")

    @property
    def is_synthetic(self) -> bool:
        """Return ``True`` for fallback and error records."""

        return is_synthetic_catalog_id(self.catalog_id)

    def to_payload(self) -> dict[str, object]:
        """Return the camelCase payload handed to presentation code."""

        return self.model_dump(by_alias=True, mode="json")


class ExternalLink(BaseModel):
    site: str
    url: str
    streaming: bool = False


class FranchiseSeries(BaseModel):
    """Compact projection of one franchise member."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    episode_count: int | None = Field(default=None, alias="episodeCount")
    status: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    subtype: str | None = None


class FranchiseInfo(BaseModel):
    """Combined episode totals and status across a title family."""

    model_config = ConfigDict(populate_by_name=True)

    total_episodes: int = Field(default=0, alias="totalEpisodes")
    status: str | None = None
    series_list: list[FranchiseSeries] = Field(
        default_factory=list, alias="seriesList"
    )


DETAIL_SECTIONS: tuple[str, ...] = ("genres", "externalLinks", "streamers", "franchise")


class SelectionDetail(BaseModel):
    """Transient detail state for the currently selected record."""

    model_config = ConfigDict(populate_by_name=True)

    catalog_id: str = Field(alias="catalogId")
    genres: list[str] = Field(default_factory=list)
    external_links: list[ExternalLink] = Field(
        default_factory=list, alias="externalLinks"
    )
    streamers: list[str] = Field(default_factory=list)
    franchise_info: FranchiseInfo | None = Field(default=None, alias="franchiseInfo")
    franchise_error: str | None = Field(default=None, alias="franchiseError")
    pending: set[str] = Field(default_factory=lambda: set(DETAIL_SECTIONS))

    def is_loading(self, section: str) -> bool:
        return section in self.pending


class ViewState(BaseModel):
    """Current sort, search and layout parameters chosen in the UI."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sort_key: SortKey = Field(default="title", alias="sortKey")
    search_text: str = Field(default="", alias="searchText")
    view_mode: ViewMode = Field(default="tiles", alias="viewMode")
