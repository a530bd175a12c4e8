"""Storage layer: cloud-synced or local key-value backends behind a JSON gateway."""

import logging

from ..config import StorageConfig
from .backend import StorageBackend
from .cloud import CloudStorage
from .gateway import JSONGateway
from .local import LocalFileStorage

logger = logging.getLogger(__name__)


def create_backend(config: StorageConfig) -> StorageBackend:
    """Factory: creates the appropriate storage backend.

    ``auto`` uses cloud storage when the environment carries cloud
    credentials and falls back to the local file otherwise.
    """
    if config.backend == "cloud":
        return CloudStorage(config.cloud)
    if config.backend == "local":
        return LocalFileStorage(config.local.path)

    cloud = CloudStorage(config.cloud)
    if cloud.is_enabled:
        logger.info("Auto-detected: using cloud storage")
        return cloud
    logger.info("Auto-detected: using local file storage")
    return LocalFileStorage(config.local.path)


__all__ = [
    'StorageBackend',
    'CloudStorage',
    'LocalFileStorage',
    'JSONGateway',
    'create_backend',
]
