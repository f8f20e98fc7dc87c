from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def temp_path_for(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".tmp")


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing files, empty files, or invalid JSON (including
    bytes that are not UTF-8). Any other OSError (permissions, a directory in
    the way, ...) propagates.
    """
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return None
    try:
        # UnicodeDecodeError is a ValueError
        raw = data.decode("utf-8")
        if not raw.strip():
            return None
        return json.loads(raw)
    except ValueError:
        logger.warning("JSON READ: %s is not valid JSON; treating as empty", path)
        return None


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = True) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.

    The replace is the commit point: readers see either the previous file or
    the new one. If anything fails before it, the temp file is removed and the
    error is re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = temp_path_for(path)
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=indent, sort_keys=sort_keys)
            f.write("\n")
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def discard_stale_temp(path: Path) -> bool:
    """
    Remove a temp file left behind by an interrupted write.

    Returns True if one was found. The main file is left alone.
    """
    tmp_path = temp_path_for(path)
    if not tmp_path.exists():
        return False
    logger.warning("JSON RECOVERY: discarding interrupted write %s", tmp_path)
    tmp_path.unlink(missing_ok=True)
    return True
