"""JSON persistence gateway on top of a key-value backend."""

import json
import logging
from typing import Any

from .backend import StorageBackend

logger = logging.getLogger(__name__)


class JSONGateway:
    """Loads and saves JSON documents by key.

    Load never fails: unreadable or undecodable data yields the default.
    Save failures are logged and dropped, never retried.
    """

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    async def load(self, key: str, default: Any) -> Any:
        try:
            raw = await self.backend.get_item(key)
        except Exception as e:
            logger.warning(f"Could not read {key} from {self.backend.__class__.__name__}: {e}")
            return default

        if not raw:
            return default
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Could not decode stored value for {key}, using default: {e}")
            return default

    async def save(self, key: str, value: Any) -> bool:
        """Serialize and store ``value``. Returns True on success."""
        try:
            serialized = json.dumps(value, ensure_ascii=False)
            await self.backend.set_item(key, serialized)
            return True
        except Exception as e:
            logger.error(f"Saving {key} to {self.backend.__class__.__name__} failed: {e}")
            return False
