"""Loading of the static, hand-curated anime list."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from .models import CuratedEntry

logger = logging.getLogger(__name__)

_ENTRIES_ADAPTER = TypeAdapter(list[CuratedEntry])


def parse_curated_entries(data: Any) -> list[CuratedEntry]:
    """Validate decoded JSON into curated entries, preserving order."""

    return _ENTRIES_ADAPTER.validate_python(data)


def load_curated_list(path: str | Path) -> list[CuratedEntry]:
    """Read the curated list file.

    A missing file yields an empty list; malformed content raises
    ``ValueError`` (``json.JSONDecodeError`` or ``pydantic.ValidationError``).
    """

    file_path = Path(path)
    if not file_path.is_file():
        logger.warning("Curated list %s not found; starting empty", file_path)
        return []
    data = json.loads(file_path.read_text(encoding="utf-8"))
    entries = parse_curated_entries(data)
    logger.info("Loaded %d curated entries from %s", len(entries), file_path)
    return entries
