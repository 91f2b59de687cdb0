"""Process-local TTL cache for warehouse lookups and charge calculations."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_MS = 300_000
DEFAULT_CLEANUP_INTERVAL_SECONDS = 60.0

_MISSING = object()


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(slots=True)
class CacheEntry:
    value: Any
    expires_at_ms: float


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    hit_rate: float


class CacheKeys:
    """Colon-delimited keys, one namespace per operation, so pattern deletes stay scoped."""

    @staticmethod
    def nearest_warehouse(seller_id: str) -> str:
        return f"nearest_warehouse:seller:{seller_id}"

    @staticmethod
    def shipping_charge(warehouse_id: str, customer_id: str, speed_type: str, product_id: str | None = None) -> str:
        base = f"shipping_charge:{warehouse_id}:{customer_id}:{speed_type}"
        return f"{base}:{product_id}" if product_id else base

    @staticmethod
    def calculation(seller_id: str, customer_id: str, speed_type: str, product_id: str | None = None) -> str:
        base = f"calculation:{seller_id}:{customer_id}:{speed_type}"
        return f"{base}:{product_id}" if product_id else base


class EphemeralCache:
    """In-memory key/value store with per-entry TTL.

    Entries expire lazily when read through ``get``/``has`` and are also swept by
    ``cleanup``, which ``start_sweeper`` runs on a background thread. One instance
    is shared by the whole pricing subsystem; every operation is guarded by a lock.

    ``get_or_set`` calls the factory without holding the lock, so two concurrent
    misses on the same key may both compute the value; the last write wins. The
    factories used here are pure lookups, so the duplicate work is tolerated.
    """

    def __init__(
        self,
        default_ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if default_ttl_ms <= 0:
            raise ValueError("default_ttl_ms must be > 0")
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock or _monotonic_ms
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._sweeper: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def _lookup(self, key: str) -> Any:
        """Return the live value for ``key`` or ``_MISSING``, counting the access."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return _MISSING
            if self._clock() > entry.expires_at_ms:
                del self._entries[key]
                self._misses += 1
                return _MISSING
            self._hits += 1
            return entry.value

    def get(self, key: str, default: Optional[T] = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        """Store ``value``; a missing or zero ``ttl_ms`` means the default TTL."""
        if ttl_ms is not None and ttl_ms < 0:
            raise ValueError("ttl_ms must be >= 0")
        ttl = ttl_ms or self.default_ttl_ms
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at_ms=self._clock() + ttl)

    def has(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if self._clock() > entry.expires_at_ms:
                del self._entries[key]
                return False
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_pattern(self, pattern: str) -> int:
        """Delete every key containing ``pattern``; returns the number removed."""
        with self._lock:
            doomed = [key for key in self._entries if pattern in key]
            for key in doomed:
                del self._entries[key]
        if doomed:
            logger.debug(f"Invalidated {len(doomed)} cache entries matching '{pattern}'")
        return len(doomed)

    def clear(self) -> None:
        """Drop all entries and reset the hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def cleanup(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if now > entry.expires_at_ms]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def get_or_set(self, key: str, factory: Callable[[], T], ttl_ms: int | None = None) -> T:
        cached = self._lookup(key)
        if cached is not _MISSING:
            return cached
        value = factory()
        self.set(key, value, ttl_ms)
        return value

    def get_stats(self) -> CacheStats:
        with self._lock:
            total = self._hits + self._misses
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._entries),
                hit_rate=self._hits / total if total > 0 else 0.0,
            )

    def reset_stats(self) -> None:
        with self._lock:
            self._hits = 0
            self._misses = 0

    # Periodic sweep

    def start_sweeper(self, interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        with self._lock:
            if self._sweeper is not None and self._sweeper.is_alive():
                return
            self._stop_event.clear()
            self._sweeper = threading.Thread(
                target=self._sweep_loop,
                args=(interval_seconds,),
                name="ephemeral-cache-sweeper",
                daemon=True,
            )
            self._sweeper.start()
        logger.info(f"Cache sweeper started (interval {interval_seconds}s)")

    def stop_sweeper(self, timeout: float | None = 5.0) -> None:
        with self._lock:
            sweeper = self._sweeper
            self._sweeper = None
        if sweeper is None:
            return
        self._stop_event.set()
        sweeper.join(timeout)
        logger.info("Cache sweeper stopped")

    @property
    def sweeper_running(self) -> bool:
        sweeper = self._sweeper
        return sweeper is not None and sweeper.is_alive()

    def _sweep_loop(self, interval_seconds: float) -> None:
        while not self._stop_event.wait(interval_seconds):
            removed = self.cleanup()
            if removed:
                logger.debug(f"Cache sweep removed {removed} expired entries")
