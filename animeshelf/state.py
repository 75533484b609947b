"""Process-wide UI state and the transitions allowed on it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from .models import (
    EnrichedRecord,
    SelectionDetail,
    SortKey,
    ViewMode,
    ViewState,
)
from .projection import project

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Selection:
    """The selected record plus the detail gathered for it so far."""

    token: int
    record: EnrichedRecord
    detail: SelectionDetail


class ShelfState:
    """Owns the enriched collection, view parameters and current selection.

    Every change goes through one of the transition methods below. Detail
    results carry the token returned by :meth:`select`; results for a
    selection that has since been replaced or closed are dropped.
    """

    def __init__(self) -> None:
        self._records: tuple[EnrichedRecord, ...] = ()
        self._loading = True
        self._view = ViewState()
        self._selection: Selection | None = None
        self._generation = 0

    @property
    def records(self) -> tuple[EnrichedRecord, ...]:
        return self._records

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def selection(self) -> Selection | None:
        return self._selection

    def replace_records(self, records: Iterable[EnrichedRecord]) -> None:
        """Publish a complete enriched collection and leave the loading state."""

        self._records = tuple(records)
        self._loading = False

    def update_view(self, **changes: Any) -> ViewState:
        """Apply validated changes to the view parameters.

        Raises ``pydantic.ValidationError`` for values outside the allowed
        sort keys or view modes.
        """

        payload = self._view.model_dump()
        payload.update({key: value for key, value in changes.items() if value is not None})
        self._view = ViewState.model_validate(payload)
        return self._view

    def set_sort_key(self, sort_key: SortKey) -> ViewState:
        return self.update_view(sort_key=sort_key)

    def set_search_text(self, search_text: str) -> ViewState:
        return self.update_view(search_text=search_text)

    def set_view_mode(self, view_mode: ViewMode) -> ViewState:
        return self.update_view(view_mode=view_mode)

    def visible_records(self) -> list[EnrichedRecord]:
        return project(self._records, self._view)

    def find_record(self, catalog_id: str) -> EnrichedRecord:
        for record in self._records:
            if record.catalog_id == catalog_id:
                return record
        raise KeyError(f"Unknown catalog id {catalog_id}")

    def select(self, record: EnrichedRecord) -> int:
        """Start a fresh selection and return its token."""

        self._generation += 1
        self._selection = Selection(
            token=self._generation,
            record=record,
            detail=SelectionDetail(catalog_id=record.catalog_id),
        )
        return self._generation

    def close_selection(self) -> None:
        self._generation += 1
        self._selection = None

    def is_current(self, token: int) -> bool:
        return self._selection is not None and self._selection.token == token

    def apply_detail(self, token: int, section: str, **fields: Any) -> bool:
        """Store one resolved detail section if ``token`` is still current."""

        selection = self._selection
        if selection is None or selection.token != token:
            logger.debug("Discarding stale %s result for selection %s", section, token)
            return False
        detail = selection.detail
        pending = set(detail.pending)
        pending.discard(section)
        selection.detail = detail.model_copy(
            update={**fields, "pending": pending}
        )
        return True
