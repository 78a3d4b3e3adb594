"""File storage port (abstract interface).

Images uploaded from the admin console are written to a bucket and the
returned public URL is stored verbatim on the owning record. Adapters:
InMemoryStorage for development and tests, LocalFileStorage for a directory
served as static files.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class StorageError(Exception):
    """A file could not be written to or removed from storage."""


@dataclass(frozen=True)
class StoredFile:
    """Result of a successful upload."""

    bucket: str
    path: str
    public_url: str


class FileStorage(ABC):
    """Abstract bucket storage interface."""

    @abstractmethod
    def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> StoredFile:
        """Write ``content`` at ``bucket/path``. Refuses to overwrite unless ``upsert``."""
        ...

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        """Public URL under which ``bucket/path`` is served."""
        ...

    @abstractmethod
    def remove(self, bucket: str, paths: list[str]) -> None:
        """Delete files. Missing paths are ignored."""
        ...

    def path_from_url(self, bucket: str, url: str) -> str | None:
        """Recover the in-bucket path of a URL produced by ``public_url``."""
        prefix = self.public_url(bucket, "")
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix) :] or None
