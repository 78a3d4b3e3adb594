"""Filesystem storage — buckets are directories under a root folder."""

from pathlib import Path

from raffle.storage.port import FileStorage, StorageError, StoredFile


class LocalFileStorage(FileStorage):
    def __init__(self, root: str, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        bucket_dir = (self.root / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise StorageError(f"Path escapes bucket: {bucket}/{path}")
        return target

    def upload(self, bucket, path, content, content_type, upsert=False):
        target = self._resolve(bucket, path)
        if target.exists() and not upsert:
            raise StorageError(f"File already exists: {bucket}/{path}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Could not write {bucket}/{path}: {exc}") from exc

        return StoredFile(bucket=bucket, path=path, public_url=self.public_url(bucket, path))

    def public_url(self, bucket, path):
        return f"{self.base_url}/{bucket}/{path}"

    def remove(self, bucket, paths):
        for path in paths:
            target = self._resolve(bucket, path)
            try:
                target.unlink(missing_ok=True)
            except OSError as exc:
                raise StorageError(f"Could not remove {bucket}/{path}: {exc}") from exc
