"""Image upload rules shared by item images and event header images."""

from uuid import uuid4

from protean.exceptions import ValidationError

from raffle import config
from raffle.storage.port import FileStorage, StoredFile


def _extension(filename: str | None) -> str:
    if filename and "." in filename:
        return filename.rsplit(".", 1)[1].lower()
    return "bin"


def validate_image(content_type: str | None, size: int) -> None:
    errors = []
    if not content_type or not content_type.startswith("image/"):
        errors.append("Please upload an image file")
    if size > config.MAX_UPLOAD_BYTES:
        errors.append(f"Image size should be less than {config.MAX_UPLOAD_BYTES // (1024 * 1024)}MB")
    if errors:
        raise ValidationError({"file": errors})


def upload_item_image(storage: FileStorage, filename, content: bytes, content_type) -> StoredFile:
    """Store a raffle item image under a random file name."""
    validate_image(content_type, len(content))
    path = f"{uuid4().hex}.{_extension(filename)}"
    return storage.upload(config.ITEM_IMAGE_BUCKET, path, content, content_type)


def upload_header_image(storage: FileStorage, event_id, filename, content: bytes, content_type) -> StoredFile:
    """Store an event header image, replacing any previous one for the event."""
    validate_image(content_type, len(content))
    path = f"{event_id}/header-image.{_extension(filename)}"
    return storage.upload(config.EVENT_HEADER_BUCKET, path, content, content_type, upsert=True)
