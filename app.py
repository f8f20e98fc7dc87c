from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


async def storage_error_handler(request: Request, exc: OSError) -> JSONResponse:
    # Distinct from 404: the page may exist, the backing file could not be read or written.
    logger.exception("STORAGE ERROR: %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"detail": "storage error"}, status_code=500)


def create_app() -> FastAPI:
    load_dotenv("local.env")

    from settings import get_settings

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    from endpoints.page_endpoints import router as pages_router

    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(OSError, storage_error_handler)

    app.include_router(pages_router)

    return app


app = create_app()
