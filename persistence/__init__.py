from __future__ import annotations

from .disk_store import DiskJsonArrayStore
from .interfaces import PageCollectionStore
from .locks import GLOBAL_PATH_LOCKS, PathLockRegistry, SerializationLock
from .page_state import Block, ImageBlock, Page, PageRecords, PageSummary, TextBlock
from .repositories import AsyncDiskPageRepository, AsyncPageRepository

__all__ = [
    "PageCollectionStore",
    "DiskJsonArrayStore",
    "SerializationLock",
    "PathLockRegistry",
    "GLOBAL_PATH_LOCKS",
    "Block",
    "TextBlock",
    "ImageBlock",
    "Page",
    "PageSummary",
    "PageRecords",
    "AsyncPageRepository",
    "AsyncDiskPageRepository",
]
