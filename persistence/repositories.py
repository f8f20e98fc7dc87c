from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Protocol, TypeVar

from settings import get_settings

from . import paths
from .disk_store import DiskJsonArrayStore
from .interfaces import PageCollectionStore
from .locks import GLOBAL_PATH_LOCKS, SerializationLock
from .page_state import Block, Page, PageRecords

T = TypeVar("T")

logger = logging.getLogger(__name__)


class AsyncPageRepository(Protocol):
    """
    The CRUD contract the request layer consumes.
    Not-found is a value (None / False); storage faults are raised.
    """

    async def list_pages(self) -> list[Page]: ...
    async def get_page(self, page_id: str) -> Page | None: ...
    async def create_page(self, page: Page) -> Page: ...

    async def update_page(
        self,
        page_id: str,
        *,
        name: str | None = None,
        blocks: list[Block] | None = None,
    ) -> Page | None: ...

    async def delete_page(self, page_id: str) -> bool: ...


class AsyncDiskPageRepository(AsyncPageRepository):
    """
    Disk-backed PageRepository over one JSON array file.

    Every operation is a full read -> mutate in memory -> full write cycle run
    inside the SerializationLock for the file, so concurrent requests behave as
    if executed one after another in arrival order. File I/O runs in worker
    threads via asyncio.to_thread; parsing and mutation happen on the loop
    between those awaits and never yield.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        store: PageCollectionStore | None = None,
        lock: SerializationLock | None = None,
    ) -> None:
        self._path = path if path is not None else paths.pages_path(paths.data_dir())
        self._store = store if store is not None else DiskJsonArrayStore(self._path, indent=get_settings().json_indent)
        self._lock = lock if lock is not None else GLOBAL_PATH_LOCKS.lock_for(self._path)
        self._needs_recovery = True

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock(self) -> SerializationLock:
        return self._lock

    def _exclusive(self, operation: Callable[[], Awaitable[T]]) -> Awaitable[T]:
        async def _guarded() -> T:
            if self._needs_recovery:
                await self._recover()
            return await operation()

        return self._lock.run_exclusive(_guarded)

    async def _recover(self) -> None:
        # rename is the commit point: a temp file seen while holding the lock
        # belongs to a write that never committed.
        await asyncio.to_thread(self._store.recover)
        self._needs_recovery = False

    async def _load(self) -> PageRecords:
        return PageRecords(await asyncio.to_thread(self._store.load))

    async def _save(self, records: PageRecords) -> None:
        await asyncio.to_thread(self._store.save, records.records)

    async def list_pages(self) -> list[Page]:
        async def _op() -> list[Page]:
            return (await self._load()).pages()

        return await self._exclusive(_op)

    async def get_page(self, page_id: str) -> Page | None:
        async def _op() -> Page | None:
            return (await self._load()).get(page_id)

        return await self._exclusive(_op)

    async def create_page(self, page: Page) -> Page:
        async def _op() -> Page:
            records = await self._load()
            records.append(page)
            await self._save(records)
            logger.debug("PAGES: created %s", page.id)
            return page

        return await self._exclusive(_op)

    async def update_page(
        self,
        page_id: str,
        *,
        name: str | None = None,
        blocks: list[Block] | None = None,
    ) -> Page | None:
        async def _op() -> Page | None:
            records = await self._load()
            updated = records.update(page_id, name=name, blocks=blocks)
            if updated is None:
                return None
            # Rewritten even when neither field is given.
            await self._save(records)
            logger.debug("PAGES: updated %s (name=%s blocks=%s)", page_id, name is not None, blocks is not None)
            return updated

        return await self._exclusive(_op)

    async def delete_page(self, page_id: str) -> bool:
        async def _op() -> bool:
            records = await self._load()
            if not records.remove(page_id):
                return False
            await self._save(records)
            logger.debug("PAGES: deleted %s", page_id)
            return True

        return await self._exclusive(_op)
