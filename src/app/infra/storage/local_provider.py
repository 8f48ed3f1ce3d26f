# src/app/infra/storage/local_provider.py
"""
Local disk storage for sauce images.
The directory is mounted as static files by the application.
"""
from __future__ import annotations

import logging
from pathlib import Path

from src.app.domain.errors import ImageDeleteError, InvalidObjectKeyError, StorageError
from src.app.infra.storage.base import ImageStorage

logger = logging.getLogger(__name__)


class LocalImageStorage(ImageStorage):
    """
    Image storage backed by a directory on local disk.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info("LocalImageStorage initialized: root=%s", self.root)

    def _path_for(self, object_key: str) -> Path:
        if not object_key or "/" in object_key or "\\" in object_key or object_key in (".", ".."):
            raise InvalidObjectKeyError(object_key, "Path traversal detected")
        path = (self.root / object_key).resolve()
        if path.parent != self.root:
            raise InvalidObjectKeyError(object_key, "Path traversal detected")
        return path

    def save(self, object_key: str, data: bytes) -> str:
        path = self._path_for(object_key)
        try:
            path.write_bytes(data)
        except OSError as e:
            logger.error("Failed to write image %s: %s", object_key, e)
            raise StorageError(f"Failed to store image {object_key}: {e}") from e

        logger.info("Stored image: key=%s, size=%d", object_key, len(data))
        return object_key

    def delete_object(self, object_key: str) -> bool:
        path = self._path_for(object_key)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Image already missing: key=%s", object_key)
            return False
        except OSError as e:
            logger.error("Failed to delete image %s: %s", object_key, e)
            raise ImageDeleteError(object_key, str(e)) from e

        logger.info("Deleted image: key=%s", object_key)
        return True

    def object_exists(self, object_key: str) -> bool:
        return self._path_for(object_key).is_file()
