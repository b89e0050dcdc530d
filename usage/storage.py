"""
Key-Value Storage Port

The usage subsystem persists everything in one flat, string-keyed namespace
of JSON-encoded values (the browser's local storage in the web client).

This module provides:
- KeyValueStore: the port (get/set/remove over string keys)
- MemoryStore: in-process store with optional quota, used by tests
- JSONFileStore: per-device JSON file holding the whole namespace
- read_json / write_json / remove_key: typed outcomes over any store

Writes are last-writer-wins. There is no locking and no merge.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from utils.logger import logger


# Storage keys shared with the web client
USAGE_KEY = "pdf-tools-usage"
PREMIUM_USAGE_KEY = "pdf-tools-premium-usage"
HISTORY_KEY = "pdfflow-file-history"
ANALYTICS_KEY = "pdfflow-analytics"
PRO_CACHE_KEY = "pdf-tools-pro-cached"


class StorageError(Exception):
    """Raised when the store is unavailable or full"""


class KeyValueStore(ABC):
    """Flat string-keyed store of string values"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent"""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one"""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""


class MemoryStore(KeyValueStore):
    """
    In-memory store.

    `quota_bytes` caps the total size of keys plus values, like the browser's
    per-origin quota. Setting `available` to False makes every call raise,
    like storage disabled in a private window.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes
        self.available = True

    def _check_available(self):
        if not self.available:
            raise StorageError("Storage is not available")

    def _size_with(self, key: str, value: str) -> int:
        size = len(key) + len(value)
        for k, v in self._data.items():
            if k != key:
                size += len(k) + len(v)
        return size

    def get(self, key: str) -> Optional[str]:
        self._check_available()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check_available()
        if self.quota_bytes is not None and self._size_with(key, value) > self.quota_bytes:
            raise StorageError(f"Quota exceeded writing '{key}'")
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._check_available()
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class JSONFileStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    Every call re-reads the file, so separate instances over the same path
    see each other's writes and the last write wins. A corrupt file reads
    as an empty namespace.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        except ValueError as e:
            logger.warning(f"Storage file {self.path} is corrupt, treating as empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object, treating as empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: Dict[str, str]):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)


@dataclass
class StorageOutcome:
    """Result of a storage operation: ok with a value, or failed with a reason"""
    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "StorageOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "StorageOutcome":
        return cls(ok=False, error=error)


def read_json(store: KeyValueStore, key: str) -> StorageOutcome:
    """
    Read and decode a JSON value.

    A missing key is a success with value None. Unreadable storage or
    malformed JSON is a failure.
    """
    try:
        raw = store.get(key)
    except StorageError as e:
        return StorageOutcome.failure(f"unavailable: {e}")

    if raw is None:
        return StorageOutcome.success(None)

    try:
        return StorageOutcome.success(json.loads(raw))
    except ValueError as e:
        return StorageOutcome.failure(f"malformed: {e}")


def write_json(store: KeyValueStore, key: str, value: Any) -> StorageOutcome:
    """Encode and store a JSON value"""
    try:
        store.set(key, json.dumps(value))
    except StorageError as e:
        return StorageOutcome.failure(str(e))
    return StorageOutcome.success(value)


def remove_key(store: KeyValueStore, key: str) -> StorageOutcome:
    try:
        store.remove(key)
    except StorageError as e:
        return StorageOutcome.failure(str(e))
    return StorageOutcome.success()


# Global store instance
_storage: Optional[KeyValueStore] = None


def get_storage() -> KeyValueStore:
    """Get the global store, built from settings on first use"""
    global _storage
    if _storage is None:
        from config import settings

        if settings.STORAGE_BACKEND == "memory":
            _storage = MemoryStore()
        else:
            _storage = JSONFileStore(settings.storage_path)
        logger.info(f"Usage storage initialized: {settings.STORAGE_BACKEND}")
    return _storage
