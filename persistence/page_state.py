from __future__ import annotations

import logging
import uuid
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

TextStyle = Literal["h1", "h2", "h3", "p"]


class TextBlock(BaseModel):
    id: str
    type: Literal["text"] = "text"
    content: str = ""
    style: TextStyle = "p"


class ImageBlock(BaseModel):
    id: str
    type: Literal["image"] = "image"
    source: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)


Block = Annotated[Union[TextBlock, ImageBlock], Field(discriminator="type")]
BLOCK_LIST: TypeAdapter[list[Block]] = TypeAdapter(list[Block])


class PageSummary(BaseModel):
    id: str
    name: str


class Page(BaseModel):
    """
    One document in the store. On disk:
      { "id": "...", "name": "...", "blocks": [ {"id": "...", "type": "text", ...}, ... ] }
    """

    id: str
    name: str
    blocks: list[Block] = Field(default_factory=list)

    @classmethod
    def new(cls, name: str) -> "Page":
        """A page with a random id and one empty paragraph block."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            blocks=[TextBlock(id=str(uuid.uuid4()), content="", style="p")],
        )

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "Page":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def summary(self) -> PageSummary:
        return PageSummary(id=self.id, name=self.name)


class PageRecords:
    """
    In-memory view over the raw records of one load of the store.

    Lookups are linear scans on "id". Records that are not objects or do not
    validate as a Page are invisible to reads and lookups but are written back
    untouched, so an unreadable entry never gets silently dropped from disk.
    """

    def __init__(self, records: list[Any]):
        self._records = list(records)

    @property
    def records(self) -> list[Any]:
        return self._records

    def _parse(self, record: Any) -> Page | None:
        if not isinstance(record, dict):
            logger.warning("PAGES: skipping non-object record %r", record)
            return None
        try:
            return Page.from_disk_doc(record)
        except ValidationError as e:
            logger.warning("PAGES: skipping invalid record id=%r: %s", record.get("id"), e)
            return None

    def pages(self) -> list[Page]:
        parsed = (self._parse(r) for r in self._records)
        return [p for p in parsed if p is not None]

    def index_of(self, page_id: str) -> int:
        for i, record in enumerate(self._records):
            if isinstance(record, dict) and record.get("id") == page_id:
                if self._parse(record) is not None:
                    return i
        return -1

    def get(self, page_id: str) -> Page | None:
        i = self.index_of(page_id)
        if i == -1:
            return None
        return Page.from_disk_doc(self._records[i])

    def append(self, page: Page) -> Page:
        # No id collision check: callers hand in unique ids.
        self._records.append(page.to_disk_doc())
        return page

    def update(self, page_id: str, *, name: str | None = None, blocks: list[Block] | None = None) -> Page | None:
        i = self.index_of(page_id)
        if i == -1:
            return None
        # Patch the stored object so keys the model does not know about survive.
        record = dict(self._records[i])
        if name is not None:
            record["name"] = name
        if blocks is not None:
            # Whole-list replacement.
            record["blocks"] = [b.model_dump(mode="json") for b in BLOCK_LIST.validate_python(blocks)]
        page = Page.from_disk_doc(record)
        self._records[i] = record
        return page

    def remove(self, page_id: str) -> bool:
        i = self.index_of(page_id)
        if i == -1:
            return False
        self._records.pop(i)
        return True
