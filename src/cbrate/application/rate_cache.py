# src/cbrate/application/rate_cache.py
"""
Rate Cache Gateway - Cache-aside Access to Daily Snapshots

Looks a snapshot up in the cache store under a date-derived key and only
calls the fetcher on a miss. Snapshots are stored as UTF-8 JSON so entries
stay readable across restarts and code versions.

There is no per-key locking: two concurrent misses for the same date both
fetch and both write. Entries are identical, so the last write wins.

Files that USE this module:
- cbrate.application.exchange_service (ExchangeService reads snapshots through the gateway)
- cbrate.app (wires the gateway to a cache store)

Files that this module USES:
- cbrate.adapters.persistence.cache_store (CacheStore contract and its errors)
- cbrate.config (default key prefix)
- cbrate.domain (RateSnapshot, CacheUnavailable)
"""
from __future__ import annotations

import json
import logging
from datetime import date
from typing import Callable, Optional

from cbrate.adapters.persistence.cache_store import CacheStore, CacheStoreError
from cbrate.config import settings
from cbrate.domain.errors import CacheUnavailable, CbrateError
from cbrate.domain.models import RateSnapshot

log = logging.getLogger(__name__)


def encode_snapshot(snapshot: RateSnapshot) -> bytes:
    return json.dumps(snapshot.to_json(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def decode_snapshot(raw: bytes) -> RateSnapshot:
    """
    Decode bytes written by encode_snapshot.

    Raises:
        ValueError: If the entry is not a valid encoded snapshot
    """
    try:
        return RateSnapshot.from_json(json.loads(raw.decode("utf-8")))
    except (KeyError, TypeError, ValueError, ArithmeticError, CbrateError) as e:
        raise ValueError(f"Undecodable snapshot: {e}") from e


class RateCacheGateway:
    """Cache-aside wrapper around a snapshot fetcher."""

    def __init__(self, store: CacheStore, prefix: Optional[str] = None):
        """
        Args:
            store: Key/value store holding encoded snapshots
            prefix: Key prefix (defaults to settings.cache_prefix)
        """
        self.store = store
        self.prefix = prefix or settings.cache_prefix

    def key_for(self, trade_date: date) -> str:
        return f"{self.prefix}_{trade_date.strftime('%Y-%m-%d')}"

    def get_or_fetch(self, trade_date: date, fetch: Callable[[], RateSnapshot]) -> RateSnapshot:
        """
        Return the cached snapshot for trade_date, fetching and storing it on a miss.

        Args:
            trade_date: Date the snapshot belongs to
            fetch: Called without arguments on a miss

        Returns:
            Cached or freshly fetched RateSnapshot

        Raises:
            CacheUnavailable: If the store rejects the key or the write
            Any error raised by fetch, unchanged
        """
        key = self.key_for(trade_date)

        try:
            raw = self.store.get(key)
        except CacheStoreError as e:
            raise CacheUnavailable(f"Cache read failed for {key}: {e}") from e

        if raw:
            try:
                snapshot = decode_snapshot(raw)
            except ValueError as e:
                log.warning("Ignoring corrupt cache entry %s: %s", key, e)
            else:
                log.debug("Cache hit: %s", key)
                return snapshot

        log.debug("Cache miss: %s", key)
        snapshot = fetch()

        try:
            stored = self.store.set(key, encode_snapshot(snapshot))
        except CacheStoreError as e:
            raise CacheUnavailable(f"Cache write failed for {key}: {e}") from e
        if stored is False:
            raise CacheUnavailable(f"Cache store refused to write {key}")
        return snapshot
