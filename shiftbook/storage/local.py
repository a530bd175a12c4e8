"""Local JSON file storage backend.

Keeps every key in a single JSON object on disk, the local fallback
when no cloud storage is configured.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .backend import StorageBackend

logger = logging.getLogger(__name__)


class LocalFileStorage(StorageBackend):
    """Simple JSON file store for local use.

    The whole file is read on first access and rewritten on every
    change. Good for a single user's shift collection.
    """

    def __init__(self, path: str = "~/.shiftbook/storage.json"):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._data: Optional[dict] = None

    def _load(self) -> dict:
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return data
                logger.warning(f"Unexpected content in {self.path}, starting fresh")
            except (ValueError, RecursionError, OSError) as e:
                # ValueError covers bad JSON and non-UTF-8 bytes
                logger.warning(f"Corrupted storage file {self.path}, starting fresh: {e}")
        return {}

    def _items(self) -> dict:
        if self._data is None:
            self._data = self._load()
        return self._data

    def _save(self):
        self.path.write_text(
            json.dumps(self._items(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

    async def get_item(self, key: str) -> Optional[str]:
        value = self._items().get(key)
        return value if isinstance(value, str) else None

    async def set_item(self, key: str, value: str) -> None:
        self._items()[key] = value
        self._save()
