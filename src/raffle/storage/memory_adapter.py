"""In-memory file storage for development and testing."""

from raffle.storage.port import FileStorage, StorageError, StoredFile


class InMemoryStorage(FileStorage):
    """Keeps uploaded files in a dict keyed by ``(bucket, path)``."""

    def __init__(self, base_url: str = "memory://storage") -> None:
        self.base_url = base_url.rstrip("/")
        self.files: dict[tuple[str, str], tuple[bytes, str]] = {}
        self.should_fail: bool = False

    def configure(self, should_fail: bool) -> None:
        """Make every subsequent write fail (simulates an unreachable bucket)."""
        self.should_fail = should_fail

    def upload(self, bucket, path, content, content_type, upsert=False):
        if self.should_fail:
            raise StorageError(f"Storage unavailable for {bucket}/{path}")
        if (bucket, path) in self.files and not upsert:
            raise StorageError(f"File already exists: {bucket}/{path}")

        self.files[(bucket, path)] = (content, content_type)
        return StoredFile(bucket=bucket, path=path, public_url=self.public_url(bucket, path))

    def public_url(self, bucket, path):
        return f"{self.base_url}/{bucket}/{path}"

    def remove(self, bucket, paths):
        if self.should_fail:
            raise StorageError(f"Storage unavailable for {bucket}")
        for path in paths:
            self.files.pop((bucket, path), None)

    def exists(self, bucket: str, path: str) -> bool:
        return (bucket, path) in self.files
