"""In-process cache for blue dollar rates.

The store only remembers the last rate written under each key together with
the instant it was written. Whether an entry is still usable is decided by
the caller, which compares the entry's age against a per-kind time-to-live.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from bluerate.providers.schemas import Rate
from bluerate.utils.datetime import ensure_utc, utc_now

Clock = Callable[[], datetime]


class RateKind(str, Enum):
    LATEST = "latest"
    HISTORICAL = "historical"


@dataclass(frozen=True)
class CacheKey:
    """Typed cache key; ``str(key)`` yields ``latest`` or ``historical_<day>``."""

    kind: RateKind
    day: date | None = None

    def __post_init__(self) -> None:
        if self.kind is RateKind.HISTORICAL and self.day is None:
            raise ValueError("historical cache keys require a day")
        if self.kind is RateKind.LATEST and self.day is not None:
            raise ValueError("the latest cache key does not take a day")

    @classmethod
    def latest(cls) -> CacheKey:
        return cls(RateKind.LATEST)

    @classmethod
    def historical(cls, day: date) -> CacheKey:
        return cls(RateKind.HISTORICAL, day)

    def __str__(self) -> str:
        if self.kind is RateKind.LATEST:
            return RateKind.LATEST.value
        assert self.day is not None
        return f"{RateKind.HISTORICAL.value}_{self.day.isoformat()}"


@dataclass(frozen=True)
class CacheEntry:
    rate: Rate
    stored_at: datetime


class RateCache:
    """Process-wide key to entry map with no eviction and no size bound."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return ensure_utc(self._clock())

    def get(self, key: CacheKey) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: CacheKey, rate: Rate) -> CacheEntry:
        """Store ``rate`` stamped with the current instant, replacing any prior entry."""

        entry = CacheEntry(rate=rate, stored_at=self.now())
        with self._lock:
            self._entries[key] = entry
        return entry

    def age(self, entry: CacheEntry) -> timedelta:
        return self.now() - entry.stored_at

    def is_fresh(self, entry: CacheEntry, ttl: timedelta) -> bool:
        return self.age(entry) < ttl

    def snapshot(self) -> dict[CacheKey, CacheEntry]:
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def init_cache(app) -> RateCache:
    """Create the process-wide cache and attach it to the Flask app."""

    cache = app.extensions.get("rate_cache")
    if cache is None:
        cache = RateCache()
        app.extensions["rate_cache"] = cache
    return cache
