from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Callable, Hashable, Sequence, TypeVar


logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 600

T = TypeVar("T")
CacheKey = tuple[Hashable, ...]


def _record_payload(record: Any) -> Any:
    if is_dataclass(record) and not isinstance(record, type):
        return {"type": type(record).__name__, "fields": asdict(record)}
    return repr(record)


def fingerprint(records: Sequence[Any]) -> str:
    """Stable SHA-256 over the record contents, in order."""
    encoded = json.dumps(
        [_record_payload(record) for record in records],
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


@dataclass
class _CacheEntry:
    created_at: float
    value: Any


class StatsCache:
    """Time-to-live memoization keyed by operation and record content.

    Keys combine the operation name, the record count and a content
    fingerprint. Stale entries are only replaced on the next access for the
    same key; nothing is evicted in the background.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = max(0.0, float(ttl_seconds))
        self._clock = clock
        self._guard = threading.Lock()
        self._entries: dict[CacheKey, _CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def key_for(self, operation: str, records: Sequence[Any], *extra: Hashable) -> CacheKey:
        return (operation, len(records), fingerprint(records), *extra)

    def get_or_compute(
        self,
        operation: str,
        records: Sequence[Any],
        compute: Callable[[], T],
        *extra: Hashable,
    ) -> T:
        key = self.key_for(operation, records, *extra)
        now = self._clock()
        with self._guard:
            entry = self._entries.get(key)
            if entry is not None and now - entry.created_at < self.ttl_seconds:
                self._hits += 1
                logger.debug("Stats cache hit for %s (%d records)", operation, len(records))
                return entry.value

            self._misses += 1

        logger.debug("Stats cache miss for %s (%d records)", operation, len(records))
        value = compute()
        with self._guard:
            self._entries[key] = _CacheEntry(created_at=self._clock(), value=value)
        return value

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()

    def clear_operation(self, operation: str) -> int:
        with self._guard:
            stale_keys = [key for key in self._entries if key[0] == operation]
            for key in stale_keys:
                del self._entries[key]
        return len(stale_keys)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def stats(self) -> dict[str, int]:
        with self._guard:
            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
