from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Storage
    data_dir: str | None
    pages_file_name: str
    json_indent: int

    # Debug / logging
    debug_log_requests: bool
    log_level: str


def get_settings() -> Settings:
    # Empty means "<project root>/data"; see persistence.paths.data_dir.
    data_dir = os.getenv("PAGES_DATA_DIR", "").strip() or None
    pages_file_name = os.getenv("PAGES_FILE_NAME", "pages.json").strip() or "pages.json"
    json_indent = _env_int("PAGES_JSON_INDENT", 2)

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", True)
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    return Settings(
        data_dir=data_dir,
        pages_file_name=pages_file_name,
        json_indent=json_indent,
        debug_log_requests=debug_log_requests,
        log_level=log_level,
    )
