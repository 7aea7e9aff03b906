"""JSON-file-backed implementation of StoragePort.

Each key lives in ``<data_dir>/<key>.json``.  Writes go through a
temporary file and ``os.replace`` so a collection file is never left
half-written.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from stockbook.config import get_logger
from stockbook.domain.repository.storage_port import StoragePort

logger = get_logger(__name__)


class JsonFileStorage(StoragePort):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._data_dir.mkdir(parents=True, exist_ok=True)

    # --- StoragePort interface ------------------------------------------------

    def load(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("storage_unreadable", key=key, path=str(path), error=str(exc))
            return None

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(json.dumps(value, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            logger.error("storage_write_failed", key=key, path=str(path))
            raise
        logger.debug("storage_saved", key=key, path=str(path))

    # --- File helpers ---------------------------------------------------------

    def _path(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"
