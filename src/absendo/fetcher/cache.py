"""
In-memory cache for fetched calendar documents.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from absendo.shared.schemas import RawCalendarDocument
from absendo.shared.utils.logger import logger


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached calendar document.

    Attributes:
        document (RawCalendarDocument): The decoded calendar.
        fetched_at (float): Clock reading when the document was stored.
    """

    document: RawCalendarDocument
    fetched_at: float


class CalendarCache:
    """
    Cache manager for storing and retrieving calendar documents.

    Entries are fresh for ``ttl_seconds`` after they were stored. Expired
    entries are kept and stay available through :meth:`get_entry` so a
    failed refresh can fall back to them. With ``max_entries`` set, storing
    beyond that many calendars evicts the ones stored longest ago.
    """

    key_prefix = "calendar"

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def _get_cache_key(self, identifier: str) -> str:
        """
        Generate a cache key.

        Args:
            identifier: Calendar source URL

        Returns:
            Complete cache key
        """
        return f"{self.key_prefix}:{identifier}"

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self.clock() - entry.fetched_at < self.ttl_seconds

    def age(self, entry: CacheEntry) -> float:
        return self.clock() - entry.fetched_at

    def get(self, identifier: str) -> Optional[RawCalendarDocument]:
        """
        Get a fresh document from the cache.

        Args:
            identifier: Calendar source URL

        Returns:
            The cached document if present and not expired, None otherwise
        """
        cache_key = self._get_cache_key(identifier)
        entry = self._entries.get(cache_key)

        if entry is not None and self.is_fresh(entry):
            logger.info(f"Cache hit for {cache_key}")
            return entry.document

        if entry is not None:
            logger.info(f"Cache expired for {cache_key}")
        else:
            logger.info(f"Cache miss for {cache_key}")
        return None

    def get_entry(self, identifier: str) -> Optional[CacheEntry]:
        """Get the cached entry regardless of its age."""
        return self._entries.get(self._get_cache_key(identifier))

    def set(self, identifier: str, document: RawCalendarDocument) -> CacheEntry:
        """
        Store a document, replacing any previous entry for the identifier.

        Args:
            identifier: Calendar source URL
            document: Document to cache

        Returns:
            The stored entry
        """
        cache_key = self._get_cache_key(identifier)
        entry = CacheEntry(document=document, fetched_at=self.clock())
        self._entries.pop(cache_key, None)
        self._entries[cache_key] = entry
        self._evict_overflow()
        logger.info(f"Cached data with key {cache_key} and TTL {self.ttl_seconds} seconds")
        return entry

    def _evict_overflow(self) -> None:
        if self.max_entries is None:
            return
        while len(self._entries) > self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.info(f"Evicted cache key {oldest}")

    def delete(self, identifier: str) -> bool:
        """
        Delete an entry from the cache.

        Returns:
            True if an entry was removed, False otherwise
        """
        cache_key = self._get_cache_key(identifier)
        if self._entries.pop(cache_key, None) is None:
            return False
        logger.info(f"Deleted cache key {cache_key}")
        return True

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: str) -> bool:
        return self._get_cache_key(identifier) in self._entries
