"""In-memory TTL cache for the fetched job list.

The cached value is one immutable snapshot; writers swap the reference,
readers never see a half-built entry.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from jobmatch.models import JobPosting


@dataclass(frozen=True)
class CacheEntry:
    jobs: tuple[JobPosting, ...]
    fetched_at: float
    fetched_at_wall: datetime


class ResultsCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._refresh_lock = threading.Lock()

    @property
    def refresh_lock(self) -> threading.Lock:
        """Held by whoever is repopulating, so concurrent misses fetch once."""
        return self._refresh_lock

    def get(self) -> CacheEntry | None:
        entry = self._entry
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self.ttl_seconds:
            return None
        return entry

    def put(self, jobs: list[JobPosting] | tuple[JobPosting, ...]) -> CacheEntry:
        entry = CacheEntry(
            jobs=tuple(jobs),
            fetched_at=self._clock(),
            fetched_at_wall=datetime.now(timezone.utc),
        )
        self._entry = entry
        return entry

    def invalidate(self) -> None:
        self._entry = None

    def age_seconds(self, entry: CacheEntry | None = None) -> int:
        entry = entry or self._entry
        if entry is None:
            return 0
        return max(0, int(self._clock() - entry.fetched_at))
