"""File storage factory.

Provides get_storage() / set_storage() to swap implementations:
- InMemoryStorage for development and testing
- LocalFileStorage when RAFFLE_STORAGE_ROOT points at a served directory
"""

import os

from raffle import config
from raffle.storage.local_adapter import LocalFileStorage
from raffle.storage.memory_adapter import InMemoryStorage
from raffle.storage.port import FileStorage

_current_storage: FileStorage | None = None


def get_storage() -> FileStorage:
    """Return the current file storage. Defaults to InMemoryStorage outside production."""
    global _current_storage
    if _current_storage is None:
        if os.environ.get("PROTEAN_ENV") == "production":
            _current_storage = LocalFileStorage(config.STORAGE_ROOT, config.PUBLIC_URL_BASE)
        else:
            _current_storage = InMemoryStorage()
    return _current_storage


def set_storage(storage: FileStorage) -> None:
    """Override the active storage (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    """Reset to default storage."""
    global _current_storage
    _current_storage = None
