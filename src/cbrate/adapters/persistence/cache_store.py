# src/cbrate/adapters/persistence/cache_store.py
"""
Cache Store - Key/Value Storage for Fetched Rate Snapshots

The rate cache gateway only needs `get(key) -> Optional[bytes]` and
`set(key, value) -> bool`. This module defines that contract and ships two
implementations:
- InMemoryCacheStore: process-wide dictionary
- FileCacheStore: one file per key, written atomically

Expiration belongs to the store: both implementations accept an optional
TTL and report expired entries as misses.

Files that USE this module:
- cbrate.application.rate_cache (RateCacheGateway reads and writes through CacheStore)
- cbrate.app (selects the store from settings)

Files that this module USES:
- cbrate.shared.validators (validate_cache_key)
"""
from __future__ import annotations

import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple, Union

from cbrate.shared.validators import validate_cache_key

log = logging.getLogger(__name__)


class CacheStoreError(Exception):
    """Raised when the backing store cannot read or write an entry."""
    pass


class CacheKeyError(CacheStoreError, ValueError):
    """Raised when a key is not acceptable to the store."""
    pass


class CacheStore(Protocol):
    """Key/value contract used by the rate cache gateway."""

    def get(self, key: str) -> Optional[bytes]:
        ...

    def set(self, key: str, value: bytes) -> bool:
        ...


def _check_key(key: str) -> None:
    if not validate_cache_key(key):
        raise CacheKeyError(f"Invalid cache key: {key!r}")


class InMemoryCacheStore:
    """Thread-safe in-process store."""

    def __init__(self, ttl_seconds: int = 0):
        """
        Args:
            ttl_seconds: Entry lifetime in seconds, 0 keeps entries forever
        """
        self.ttl_seconds = ttl_seconds
        self._data: Dict[str, Tuple[bytes, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[bytes]:
        _check_key(key)
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            value, stored_at = item
            if self.ttl_seconds and time.time() - stored_at >= self.ttl_seconds:
                del self._data[key]
                return None
            return value

    def set(self, key: str, value: bytes) -> bool:
        _check_key(key)
        with self._lock:
            self._data[key] = (value, time.time())
        return True

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class FileCacheStore:
    """
    Directory-backed store surviving process restarts.

    Each key maps to `<directory>/<key>.cache`. Writes go to a temporary file
    first and are then renamed over the target, so readers never see a
    partially written entry.
    """

    SUFFIX = ".cache"

    def __init__(self, directory: Union[str, Path], ttl_seconds: int = 0):
        """
        Args:
            directory: Directory holding cache files (created if missing)
            ttl_seconds: Entry lifetime in seconds, 0 keeps entries forever
        """
        self.directory = Path(directory)
        self.ttl_seconds = ttl_seconds
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        _check_key(key)
        return self.directory / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Optional[bytes]:
        """
        Read an entry.

        Returns:
            Stored bytes, or None when missing or expired

        Raises:
            CacheKeyError: If the key is invalid
            CacheStoreError: If the file exists but cannot be read
        """
        p = self._path(key)
        try:
            if self.ttl_seconds and time.time() - p.stat().st_mtime >= self.ttl_seconds:
                log.debug("Cache file expired: %s", p)
                return None
            return p.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheStoreError(f"Failed to read cache file {p}: {e}") from e

    def set(self, key: str, value: bytes) -> bool:
        """
        Store an entry using atomic write.

        Raises:
            CacheKeyError: If the key is invalid
            CacheStoreError: If the file cannot be written
        """
        p = self._path(key)

        # Atomic write: write to temp file first, then rename atomically
        temp_path = None
        try:
            temp_fd, temp_path = tempfile.mkstemp(suffix=".tmp", dir=str(self.directory))
            with os.fdopen(temp_fd, "wb") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(p))
        except OSError as e:
            if temp_path is not None:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
            raise CacheStoreError(f"Failed to write cache file {p}: {e}") from e
        return True
