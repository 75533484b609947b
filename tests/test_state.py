"""Tests for the UI state container transitions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from animeshelf.models import EnrichedRecord, ViewState
from animeshelf.state import ShelfState


def make_record(title: str, catalog_id: str) -> EnrichedRecord:
    return EnrichedRecord(title=title, catalog_id=catalog_id)


def test_defaults() -> None:
    state = ShelfState()

    assert state.loading is True
    assert state.records == ()
    assert state.view == ViewState(sort_key="title", search_text="", view_mode="tiles")
    assert state.selection is None


def test_replace_records_publishes_whole_collection() -> None:
    state = ShelfState()
    records = [make_record("B", "2"), make_record("A", "1")]

    state.replace_records(records)

    assert state.loading is False
    assert state.records == tuple(records)
    assert [item.title for item in state.visible_records()] == ["A", "B"]


def test_view_transitions_validate_values() -> None:
    state = ShelfState()

    state.set_sort_key("watchOrder")
    state.set_search_text("bebop")
    view = state.set_view_mode("list")

    assert view.sort_key == "watchOrder"
    assert view.search_text == "bebop"
    assert view.view_mode == "list"

    with pytest.raises(ValidationError):
        state.set_sort_key("popularity")  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        state.update_view(view_mode="grid")
    assert state.view == view


def test_find_record_raises_for_unknown_id() -> None:
    state = ShelfState()
    state.replace_records([make_record("Monster", "19")])

    assert state.find_record("19").title == "Monster"
    with pytest.raises(KeyError):
        state.find_record("fallback-Nothing")


def test_stale_detail_results_are_discarded() -> None:
    state = ShelfState()
    first = make_record("Monster", "19")
    second = make_record("Mushishi", "20")

    old_token = state.select(first)
    new_token = state.select(second)

    assert state.apply_detail(old_token, "genres", genres=["Thriller"]) is False
    assert state.apply_detail(new_token, "genres", genres=["Slice of Life"]) is True

    assert state.selection is not None
    detail = state.selection.detail
    assert detail.catalog_id == "20"
    assert detail.genres == ["Slice of Life"]
    assert not detail.is_loading("genres")
    assert detail.is_loading("franchise")


def test_closing_selection_invalidates_its_token() -> None:
    state = ShelfState()
    token = state.select(make_record("Monster", "19"))

    state.close_selection()

    assert state.selection is None
    assert state.apply_detail(token, "streamers", streamers=["Netflix"]) is False
