from __future__ import annotations

from typing import Any, Protocol


class PageCollectionStore(Protocol):
    """
    Storage seam for the page collection: the whole ordered collection is
    loaded and saved in one piece. A smarter backend (indexed, incremental)
    can replace the single JSON file behind this without touching the CRUD
    repositories.
    """

    def load(self) -> list[Any]:
        """Load and return the full collection (never None)."""
        ...

    def save(self, records: list[Any]) -> None:
        """Persist the full collection atomically."""
        ...

    def recover(self) -> bool:
        """Clean up after an interrupted save. Returns True if anything was discarded."""
        ...
