"""
Module: services.cache

Purpose:
    Caching of analysis results keyed by uploaded file content, subject,
    exam and user. Keys are user-scoped so one user's results are never
    served to another.

Key Classes:
    - AnalysisStore: Abstract key/value store with TTL
    - InMemoryStore: Thread-safe LRU store with per-entry expiry

Key Functions:
    - generate_file_hash(): md5 hex digest of file bytes
    - generate_cache_key(): Order-independent key for a set of files
    - invalidate_user(): Drop every entry belonging to one user

Used By:
    - services.analysis: Result caching
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60  # 1 hour
DEFAULT_MAX_ENTRIES = 100
KEY_PREFIX = "analysis"
ANONYMOUS_USER = "anonymous"


class AnalysisStore(ABC):
    """Key/value store for analysis results."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None if missing or expired."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value, expiring after ``ttl`` seconds (store default if None)."""

    @abstractmethod
    def expire(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Return all live keys."""


class InMemoryStore(AnalysisStore):
    """
    Process-local store with TTL and LRU eviction.

    Expired entries are dropped lazily on access and swept whenever the
    store reaches ``max_entries``; if it is still full the least recently
    used entry is evicted.

    Example:
        >>> store = InMemoryStore(default_ttl=60)
        >>> store.set("analysis:u1:abc:123", report)
        >>> store.get("analysis:u1:abc:123") is report
        True
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock=time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._default_ttl = default_ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            logger.debug(f"Cache HIT: {key[:30]}")
            return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self._default_ttl if ttl is None else ttl
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self._max_entries:
                self._evict()
            self._entries[key] = (self._clock() + ttl, value)
        logger.debug(f"Cache SET: {key[:30]}")

    def expire(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def keys(self) -> List[str]:
        now = self._clock()
        with self._lock:
            return [k for k, (expires_at, _) in self._entries.items() if now < expires_at]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Cache cleared")

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict(self) -> None:
        # Caller holds the lock
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Cache SWEEP: {len(expired)} expired entries")
        if len(self._entries) >= self._max_entries:
            oldest, _ = self._entries.popitem(last=False)
            logger.debug(f"Cache EVICT: {oldest[:30]}")


def generate_file_hash(data: bytes) -> str:
    """Return the md5 hex digest of file content."""
    return hashlib.md5(data).hexdigest()


def generate_cache_key(
    blobs: Iterable[bytes],
    subject: str,
    exam_name: str = "",
    user_id: str = ANONYMOUS_USER,
) -> str:
    """
    Build a user-scoped cache key for a set of uploaded files.

    File hashes are sorted, so the key does not depend on upload order.

    Returns:
        ``analysis:<user>:<first 32 chars of joined hashes>:<8-char context hash>``
    """
    file_hashes = "-".join(sorted(generate_file_hash(blob) for blob in blobs))
    context = hashlib.md5(f"{subject}-{exam_name}-{user_id}".encode("utf-8")).hexdigest()[:8]
    return f"{KEY_PREFIX}:{user_id}:{file_hashes[:32]}:{context}"


def invalidate_user(store: AnalysisStore, user_id: str) -> int:
    """
    Remove all cached analyses for one user.

    Returns:
        Number of entries removed.
    """
    prefix = f"{KEY_PREFIX}:{user_id}:"
    cleared = sum(1 for key in store.keys() if key.startswith(prefix) and store.expire(key))
    if cleared:
        logger.info(f"Cleared {cleared} cache entries for user {user_id}")
    return cleared
