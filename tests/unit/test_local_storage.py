from __future__ import annotations

from pathlib import Path

import pytest

from src.app.domain.errors import InvalidObjectKeyError, UnsupportedImageError
from src.app.infra.storage.base import ImageStorage
from src.app.infra.storage.local_provider import LocalImageStorage


@pytest.fixture
def storage(tmp_path: Path) -> LocalImageStorage:
    return LocalImageStorage(tmp_path / "images")


class TestGenerateObjectKey:
    def test_spaces_become_underscores(self, storage: LocalImageStorage) -> None:
        key = storage.generate_object_key("hot sauce bottle.jpg", "image/jpeg")

        assert key.startswith("hot_sauce_bottle.jpg")
        assert key.endswith(".jpg")

    @pytest.mark.parametrize(
        "content_type, extension",
        [("image/jpg", "jpg"), ("image/jpeg", "jpg"), ("image/png", "png"), ("IMAGE/PNG", "png")],
    )
    def test_extension_from_mime_type(
        self, storage: LocalImageStorage, content_type: str, extension: str
    ) -> None:
        key = storage.generate_object_key("x.png", content_type)

        assert key.rsplit(".", 1)[1] == extension

    @pytest.mark.parametrize("content_type", ["image/gif", "text/plain", None])
    def test_rejects_other_types(self, storage: LocalImageStorage, content_type: str | None) -> None:
        with pytest.raises(UnsupportedImageError):
            storage.generate_object_key("x.gif", content_type)

    def test_strips_path_separators(self, storage: LocalImageStorage) -> None:
        key = storage.generate_object_key("../../etc/passwd.png", "image/png")

        assert "/" not in key


class TestUrls:
    def test_public_url(self) -> None:
        assert (
            ImageStorage.public_url("http://localhost:3000/", "a1.jpg")
            == "http://localhost:3000/images/a1.jpg"
        )

    def test_object_key_from_url(self) -> None:
        assert ImageStorage.object_key_from_url("http://localhost:3000/images/a1.jpg") == "a1.jpg"

    def test_object_key_from_foreign_url(self) -> None:
        assert ImageStorage.object_key_from_url("https://cdn.example.com/a1.jpg") is None


class TestLocalImageStorage:
    def test_creates_root(self, tmp_path: Path) -> None:
        LocalImageStorage(tmp_path / "nested" / "images")

        assert (tmp_path / "nested" / "images").is_dir()

    def test_save_and_delete(self, storage: LocalImageStorage) -> None:
        key = storage.save("a1.jpg", b"data")

        assert storage.object_exists(key)
        assert (storage.root / key).read_bytes() == b"data"

        assert storage.delete_object(key) is True
        assert not storage.object_exists(key)

    def test_delete_missing(self, storage: LocalImageStorage) -> None:
        assert storage.delete_object("missing.jpg") is False

    @pytest.mark.parametrize("key", ["../escape.jpg", "sub/dir.jpg", "..", ""])
    def test_rejects_traversal(self, storage: LocalImageStorage, key: str) -> None:
        with pytest.raises(InvalidObjectKeyError):
            storage.save(key, b"data")
