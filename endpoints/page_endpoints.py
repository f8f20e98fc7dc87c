# page_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from persistence import repositories as persistence_repositories
from persistence.page_state import BLOCK_LIST, Page
from settings import get_settings

router = APIRouter(prefix="/api/pages", tags=["pages"])
logger = logging.getLogger(__name__)

SETTINGS = get_settings()
DEBUG_LOG_REQUESTS = SETTINGS.debug_log_requests

PAGE_REPO = persistence_repositories.AsyncDiskPageRepository()


async def _read_json_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _required_name(body: dict[str, Any]) -> str:
    name = body.get("name")
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        raise HTTPException(status_code=400, detail="Page name is required")
    return name


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Page not found")


@router.get("")
async def list_pages() -> list[dict[str, Any]]:
    pages = await PAGE_REPO.list_pages()
    if DEBUG_LOG_REQUESTS:
        logger.info("PAGES LIST: count=%d", len(pages))
    return [p.summary().model_dump() for p in pages]


@router.post("", status_code=201)
async def create_page(request: Request) -> dict[str, Any]:
    body = await _read_json_body(request)
    name = _required_name(body)

    page = Page.new(name)
    created = await PAGE_REPO.create_page(page)
    if DEBUG_LOG_REQUESTS:
        logger.info("PAGES CREATE: id=%s", created.id)
    return created.to_disk_doc()


@router.get("/{page_id}")
async def get_page(page_id: str) -> dict[str, Any]:
    page = await PAGE_REPO.get_page(page_id)
    if page is None:
        raise _not_found()
    return page.to_disk_doc()


@router.put("/{page_id}")
async def rename_page(page_id: str, request: Request) -> dict[str, Any]:
    body = await _read_json_body(request)
    name = _required_name(body)

    updated = await PAGE_REPO.update_page(page_id, name=name)
    if updated is None:
        raise _not_found()
    if DEBUG_LOG_REQUESTS:
        logger.info("PAGES RENAME: id=%s", page_id)
    return updated.to_disk_doc()


@router.delete("/{page_id}")
async def delete_page(page_id: str) -> JSONResponse:
    deleted = await PAGE_REPO.delete_page(page_id)
    if not deleted:
        raise _not_found()
    if DEBUG_LOG_REQUESTS:
        logger.info("PAGES DELETE: id=%s", page_id)
    return JSONResponse({"success": True})


@router.patch("/{page_id}/blocks")
async def replace_blocks(page_id: str, request: Request) -> dict[str, Any]:
    body = await _read_json_body(request)
    raw_blocks = body.get("blocks")
    if not isinstance(raw_blocks, list):
        raise HTTPException(status_code=400, detail="blocks array is required")
    try:
        blocks = BLOCK_LIST.validate_python(raw_blocks)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"invalid blocks: {e.error_count()} error(s)") from e
    if not blocks:
        raise HTTPException(status_code=400, detail="a page needs at least one block")
    block_ids = [b.id for b in blocks]
    if len(set(block_ids)) != len(block_ids):
        raise HTTPException(status_code=400, detail="block ids must be unique")

    updated = await PAGE_REPO.update_page(page_id, blocks=blocks)
    if updated is None:
        raise _not_found()
    if DEBUG_LOG_REQUESTS:
        logger.info("PAGES BLOCKS: id=%s count=%d", page_id, len(blocks))
    return {"blocks": [b.model_dump(mode="json") for b in updated.blocks]}
