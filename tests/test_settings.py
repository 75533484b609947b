"""Configuration settings behaviour tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from animeshelf.config import DEFAULT_STREAMING_SERVICES, Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.enrichment_mode == "concurrent"
    assert settings.streaming_services == DEFAULT_STREAMING_SERVICES
    assert str(settings.kitsu_api_url).startswith("https://kitsu.io/api/edge")


def test_streaming_services_parse_comma_separated_values() -> None:
    """Streaming services are case-folded and de-duplicated."""

    settings = Settings(_env_file=None, STREAMING_SERVICES="Crunchyroll, HIDIVE,crunchyroll,")

    assert settings.streaming_services == ("crunchyroll", "hidive")


def test_streaming_services_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("STREAMING_SERVICES", "Netflix,Hulu")

    settings = Settings(_env_file=None)

    assert settings.streaming_services == ("netflix", "hulu")


def test_blank_streaming_services_fall_back_to_defaults() -> None:
    settings = Settings(_env_file=None, STREAMING_SERVICES=" , ")

    assert settings.streaming_services == DEFAULT_STREAMING_SERVICES


def test_invalid_enrichment_mode_raises() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENRICHMENT_MODE="parallel")


def test_sequential_mode_with_delay() -> None:
    settings = Settings(
        _env_file=None, ENRICHMENT_MODE="sequential", ENRICHMENT_DELAY_SECONDS="1.5"
    )

    assert settings.enrichment_mode == "sequential"
    assert settings.enrichment_delay_seconds == 1.5
