# src/cbrate/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains the cache stores for fetched rate snapshots:
- In-memory storage
- File-based storage
"""

from cbrate.adapters.persistence.cache_store import (
    CacheKeyError,
    CacheStore,
    CacheStoreError,
    FileCacheStore,
    InMemoryCacheStore,
)

__all__ = [
    "CacheStore",
    "CacheStoreError",
    "CacheKeyError",
    "InMemoryCacheStore",
    "FileCacheStore",
]
