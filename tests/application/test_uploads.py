"""Application tests for image upload rules and storage adapters."""

import pytest
from protean.exceptions import ValidationError
from raffle import config
from raffle.storage import get_storage, reset_storage
from raffle.storage.local_adapter import LocalFileStorage
from raffle.storage.memory_adapter import InMemoryStorage
from raffle.storage.port import StorageError
from raffle.storage.uploads import upload_header_image, upload_item_image, validate_image


class TestValidateImage:
    def test_accepts_images(self):
        validate_image("image/png", 1024)

    def test_rejects_other_content_types(self):
        with pytest.raises(ValidationError) as exc:
            validate_image("application/pdf", 1024)
        assert exc.value.messages["file"] == ["Please upload an image file"]

    def test_rejects_large_files(self):
        with pytest.raises(ValidationError) as exc:
            validate_image("image/jpeg", config.MAX_UPLOAD_BYTES + 1)
        assert "less than 5MB" in exc.value.messages["file"][0]


class TestUploads:
    def test_item_images_get_random_names(self):
        storage = InMemoryStorage()
        first = upload_item_image(storage, "kayak.JPG", b"1", "image/jpeg")
        second = upload_item_image(storage, "kayak.JPG", b"2", "image/jpeg")

        assert first.bucket == config.ITEM_IMAGE_BUCKET
        assert first.path != second.path
        assert first.path.endswith(".jpg")
        assert first.public_url == f"memory://storage/{config.ITEM_IMAGE_BUCKET}/{first.path}"

    def test_header_image_overwrites_previous(self):
        storage = InMemoryStorage()
        upload_header_image(storage, "evt-1", "old.png", b"old", "image/png")
        stored = upload_header_image(storage, "evt-1", "new.png", b"new", "image/png")

        assert stored.path == "evt-1/header-image.png"
        assert storage.files[(config.EVENT_HEADER_BUCKET, "evt-1/header-image.png")][0] == b"new"

    def test_storage_failure_surfaces(self):
        storage = InMemoryStorage()
        storage.configure(should_fail=True)
        with pytest.raises(StorageError):
            upload_item_image(storage, "x.png", b"x", "image/png")

    def test_path_from_url(self):
        storage = InMemoryStorage()
        stored = upload_item_image(storage, "x.png", b"x", "image/png")
        assert storage.path_from_url(config.ITEM_IMAGE_BUCKET, stored.public_url) == stored.path
        assert storage.path_from_url(config.ITEM_IMAGE_BUCKET, "https://elsewhere/x.png") is None


class TestLocalFileStorage:
    def test_writes_and_removes_files(self, tmp_path):
        storage = LocalFileStorage(str(tmp_path), "http://localhost:8000/storage")
        stored = storage.upload("raffle-items", "a.png", b"png", "image/png")

        assert (tmp_path / "raffle-items" / "a.png").read_bytes() == b"png"
        assert stored.public_url == "http://localhost:8000/storage/raffle-items/a.png"

        storage.remove("raffle-items", ["a.png", "missing.png"])
        assert not (tmp_path / "raffle-items" / "a.png").exists()

    def test_refuses_overwrite_without_upsert(self, tmp_path):
        storage = LocalFileStorage(str(tmp_path), "http://localhost:8000/storage")
        storage.upload("raffle-items", "a.png", b"1", "image/png")
        with pytest.raises(StorageError):
            storage.upload("raffle-items", "a.png", b"2", "image/png")

    def test_rejects_paths_outside_root(self, tmp_path):
        storage = LocalFileStorage(str(tmp_path), "http://localhost:8000/storage")
        with pytest.raises(StorageError):
            storage.upload("raffle-items", "../../escape.png", b"x", "image/png")


class TestStorageFactory:
    def test_default_is_in_memory(self):
        reset_storage()
        assert isinstance(get_storage(), InMemoryStorage)
