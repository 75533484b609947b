"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Iterable, Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_STREAMING_SERVICES: tuple[str, ...] = (
    "crunchyroll",
    "netflix",
    "hulu",
    "funimation",
    "hidive",
    "disney+",
    "amazon",
    "prime video",
    "max",
    "tubi",
)


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="AnimeShelf", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    kitsu_api_url: HttpUrl = Field(
        default="https://kitsu.io/api/edge", alias="KITSU_API_URL"
    )
    jikan_api_url: HttpUrl = Field(
        default="https://api.jikan.moe/v4", alias="JIKAN_API_URL"
    )

    curated_list_path: str = Field(
        default="data/anime_list.json", alias="CURATED_LIST_PATH"
    )

    enrichment_mode: Literal["concurrent", "sequential"] = Field(
        default="concurrent", alias="ENRICHMENT_MODE"
    )
    enrichment_concurrency: int = Field(
        default=8, alias="ENRICHMENT_CONCURRENCY", ge=1, le=64
    )
    enrichment_delay_seconds: float = Field(
        default=0.5, alias="ENRICHMENT_DELAY_SECONDS", ge=0, le=60
    )
    franchise_search_limit: int = Field(
        default=20, alias="FRANCHISE_SEARCH_LIMIT", ge=1, le=20
    )

    streaming_services: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_STREAMING_SERVICES, alias="STREAMING_SERVICES"
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("streaming_services", mode="before")
    @classmethod
    def _parse_streaming_services(cls, value: object) -> tuple[str, ...]:
        """Normalise the streaming allow-list from environment values."""

        if value is None:
            return DEFAULT_STREAMING_SERVICES
        if isinstance(value, str):
            raw_values = [part.strip() for part in value.split(",")]
        elif isinstance(value, Iterable):
            raw_values = [str(part).strip() for part in value]
        else:
            raise TypeError(
                "STREAMING_SERVICES must be a string or iterable of strings"
            )

        cleaned: list[str] = []
        for entry in raw_values:
            name = entry.casefold()
            if name and name not in cleaned:
                cleaned.append(name)
        if not cleaned:
            return DEFAULT_STREAMING_SERVICES
        return tuple(cleaned)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
