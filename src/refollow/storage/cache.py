from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from refollow.logging import get_logger
from refollow.models.profile import AggregatedResult, CacheEntry

LOGGER = get_logger(__name__)

COOKIE_NAME = "refollow_cache_ts"


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_cookie_timestamp(value: Optional[str]) -> float:
    """Numeric value of the freshness cookie; anything unparseable counts as 0."""
    if not value:
        return 0.0
    try:
        parsed = float(value.strip())
    except ValueError:
        return 0.0
    if math.isnan(parsed):
        return 0.0
    return parsed


@dataclass
class RefollowCache:
    """Per-FID results with a TTL checked at read time.

    Entries are never evicted; a stale entry stays until the next miss
    overwrites it.
    """

    ttl_ms: int = 5 * 60 * 1000
    clock: Callable[[], int] = now_ms
    entries: Dict[int, CacheEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    def get(self, fid: int) -> Optional[CacheEntry]:
        with self._lock:
            return self.entries.get(fid)

    def get_fresh(self, fid: int, *, now: Optional[int] = None) -> Optional[CacheEntry]:
        entry = self.get(fid)
        if entry is None:
            return None
        current = self.clock() if now is None else now
        if current - entry.computed_at < self.ttl_ms:
            return entry
        LOGGER.debug("Cache entry for %s is stale (age=%dms)", fid, current - entry.computed_at)
        return None

    def put(self, fid: int, result: AggregatedResult, *, now: Optional[int] = None) -> CacheEntry:
        entry = CacheEntry(fid=fid, result=result, computed_at=self.clock() if now is None else now)
        with self._lock:
            self.entries[fid] = entry
        return entry


def cached_entry_for(
    cache: RefollowCache,
    fid: int,
    *,
    force_refresh: bool,
    cookie_ts: float,
    now: Optional[int] = None,
) -> Optional[CacheEntry]:
    """Return the entry to serve, or ``None`` when the request must refetch.

    The cookie is only checked for being non-zero; its value is never
    compared with the entry or the clock.
    """
    if force_refresh or not cookie_ts:
        return None
    return cache.get_fresh(fid, now=now)


__all__ = [
    "COOKIE_NAME",
    "RefollowCache",
    "cached_entry_for",
    "now_ms",
    "parse_cookie_timestamp",
]
