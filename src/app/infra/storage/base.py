# src/app/infra/storage/base.py
"""
Abstract base class for sauce image storage.
This interface allows easy swapping between different storage backends.
"""
from __future__ import annotations

import re
import time
from abc import ABC, abstractmethod
from typing import Optional

from src.app.domain.errors import UnsupportedImageError

# MIME type -> stored file extension
MIME_TYPES: dict[str, str] = {
    "image/jpg": "jpg",
    "image/jpeg": "jpg",
    "image/png": "png",
}

IMAGES_ROUTE = "images"


class ImageStorage(ABC):
    """
    Abstract interface for image storage operations.

    Implementations:
    - LocalImageStorage: files on local disk, served as static files
    """

    @abstractmethod
    def save(self, object_key: str, data: bytes) -> str:
        """
        Store image bytes under `object_key`.

        Args:
            object_key: Key produced by generate_object_key
            data: Raw image content

        Returns:
            The key the image was stored under
        """
        pass

    @abstractmethod
    def delete_object(self, object_key: str) -> bool:
        """
        Delete an image.

        Args:
            object_key: The key of the image to delete

        Returns:
            True if the image existed and was removed
        """
        pass

    @abstractmethod
    def object_exists(self, object_key: str) -> bool:
        pass

    def generate_object_key(
        self,
        filename: str,
        content_type: Optional[str],
    ) -> str:
        """
        Generate a unique key for an uploaded image.

        Format: {filename_with_underscores}{epoch_millis}.{ext}

        Raises:
            UnsupportedImageError: if the content type is not an accepted image type
        """
        extension = MIME_TYPES.get((content_type or "").lower())
        if extension is None:
            raise UnsupportedImageError(content_type)

        name = "_".join(filename.split(" "))
        name = re.sub(r"[^a-zA-Z0-9._-]", "_", name)
        return f"{name}{int(time.time() * 1000)}.{extension}"

    @staticmethod
    def public_url(base_url: str, object_key: str) -> str:
        return f"{base_url.rstrip('/')}/{IMAGES_ROUTE}/{object_key}"

    @staticmethod
    def object_key_from_url(image_url: str) -> Optional[str]:
        """Return the key part of an image URL, or None if it is not one of ours."""
        marker = f"/{IMAGES_ROUTE}/"
        if marker not in image_url:
            return None
        key = image_url.split(marker, 1)[1]
        return key or None
