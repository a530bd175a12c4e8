"""Cloud key-value storage backend over HTTP.

Talks to a small per-user key-value service:

    GET    {base_url}/users/{user_id}/items/{key}  -> {"value": "..."} | 404
    PUT    {base_url}/users/{user_id}/items/{key}  <- {"value": "..."}

Data stays bound to the user, so it follows them across devices.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..config import CloudStorageConfig
from .backend import StorageBackend

logger = logging.getLogger(__name__)


class CloudStorage(StorageBackend):
    """HTTP key-value storage bound to one user."""

    def __init__(
        self,
        config: CloudStorageConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.headers = {"Authorization": f"Bearer {config.token}"} if config.token else {}
        self.base = f"{config.base_url.rstrip('/')}/users/{quote(config.user_id, safe='')}/items"
        self._transport = transport

    @property
    def is_enabled(self) -> bool:
        return bool(self.config.base_url) and bool(self.config.user_id)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self.headers,
            timeout=self.config.timeout_s,
            transport=self._transport,
        )

    def _url(self, key: str) -> str:
        return f"{self.base}/{quote(key, safe='')}"

    async def get_item(self, key: str) -> Optional[str]:
        async with self._client() as client:
            resp = await client.get(self._url(key))
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        value = resp.json().get("value")
        return value if isinstance(value, str) else None

    async def set_item(self, key: str, value: str) -> None:
        async with self._client() as client:
            resp = await client.put(self._url(key), json={"value": value})
        resp.raise_for_status()
        logger.debug(f"Cloud item {key} saved ({len(value)} chars)")
