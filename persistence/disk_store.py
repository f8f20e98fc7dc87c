from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from json_store import atomic_write_json, discard_stale_temp, read_json

from .interfaces import PageCollectionStore

logger = logging.getLogger(__name__)


class DiskJsonArrayStore(PageCollectionStore):
    """
    Stores a single JSON array on disk at a fixed path.

    - Always returns a list (empty list on missing/empty/invalid JSON or a non-array document).
    - Writes atomically (temp file beside the real one, then replace).
    - Does no locking of its own; callers serialize access.
    """

    def __init__(self, path: Path, *, indent: int = 2):
        self._path = path
        self._indent = indent

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Any]:
        raw = read_json(self._path)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("PAGES LOAD: %s does not hold a JSON array; treating as empty", self._path)
            return []
        return raw

    def save(self, records: list[Any]) -> None:
        # Key order inside records is kept as given so files diff cleanly.
        atomic_write_json(self._path, records, indent=self._indent, sort_keys=False)
        logger.debug("PAGES SAVE: wrote %d record(s) to %s", len(records), self._path)

    def recover(self) -> bool:
        return discard_stale_temp(self._path)
