from animeshelf.utils import (
    coerce_number,
    error_catalog_id,
    fallback_catalog_id,
    is_streaming_site,
    is_synthetic_catalog_id,
    normalize_title,
)


def test_fallback_and_error_tokens_are_distinct():
    assert fallback_catalog_id("Made in Abyss") == "fallback-Made-in-Abyss"
    assert error_catalog_id("Made in Abyss") == "error-Made-in-Abyss"


def test_synthetic_ids():
    assert is_synthetic_catalog_id("fallback-Made-in-Abyss")
    assert is_synthetic_catalog_id("error-Made-in-Abyss")
    assert is_synthetic_catalog_id("")
    assert not is_synthetic_catalog_id("13273")


def test_normalize_title():
    assert normalize_title("  Made IN Abyss ") == "made in abyss"
    assert normalize_title(None) == ""


def test_is_streaming_site_is_case_insensitive_substring():
    services = ("crunchyroll", "netflix")
    assert is_streaming_site("Crunchyroll Premium", services)
    assert is_streaming_site("NETFLIX", services)
    assert not is_streaming_site("Official Site", services)
    assert not is_streaming_site(None, services)


def test_coerce_number():
    assert coerce_number("8.5") == 8.5
    assert coerce_number(7) == 7.0
    assert coerce_number("n/a") == 0.0
    assert coerce_number(None) == 0.0
    assert coerce_number("nan") == 0.0
    assert coerce_number(True) == 0.0
