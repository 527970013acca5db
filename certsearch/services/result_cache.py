"""
In-process result cache for certification searches.

Maps a normalized query (or a PDI cache key) to the certifications parsed
from a previous model response. The ``source`` tag is not stored; callers
derive it from whether ``get`` hit.

Policy:
- Default (no capacity, no TTL): unbounded and never expires, lives as long
  as the process.
- ``max_entries``: the least recently written entry is evicted first.
- ``ttl_seconds``: entries older than this are treated as absent.

One instance is created at application start (certsearch.main) and handed to
request handlers through certsearch.dependencies.get_result_cache. The async
handlers use it from the event loop only; the lock covers callers on other
threads.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from certsearch.schemas.certifications import Certification
from certsearch.utils.logging import get_logger

logger = get_logger(__name__)

CachedCertifications = Tuple[Certification, ...]


@dataclass(frozen=True)
class CacheEntry:
    certifications: CachedCertifications
    stored_at: float


class ResultCache:
    """Thread-safe mapping of cache key to previously parsed certifications."""

    def __init__(
        self,
        max_entries: Optional[int] = None,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be positive or None")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive or None")

        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def _is_expired(self, entry: CacheEntry) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - entry.stored_at >= self.ttl_seconds

    def get(self, key: str) -> Optional[CachedCertifications]:
        """Return the stored certifications for ``key``, or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_expired(entry):
                del self._entries[key]
                logger.debug(f"Cache entry expired for key='{key[:80]}'")
                return None
            return entry.certifications

    def put(self, key: str, certifications: Iterable[Certification]) -> None:
        """Store ``certifications`` under ``key``, replacing any previous entry."""
        entry = CacheEntry(
            certifications=tuple(certifications),
            stored_at=self._clock(),
        )
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    evicted_key, _ = self._entries.popitem(last=False)
                    logger.debug(f"Cache evicted key='{evicted_key[:80]}'")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.get(key) is not None
