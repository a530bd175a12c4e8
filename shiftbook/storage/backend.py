"""Abstract key-value storage backend."""
from abc import ABC, abstractmethod
from typing import Optional


class StorageBackend(ABC):
    """Abstract base class for key-value storage backends.

    Values are opaque strings; encoding is the caller's concern.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return stored value, or None when the key is absent."""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous one."""
        pass
