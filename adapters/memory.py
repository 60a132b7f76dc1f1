"""In-process adapter backed by a dict and a sorted key index."""

from __future__ import annotations

import bisect
import logging
import threading

from adapters.base import KVStore, Result

logger = logging.getLogger(__name__)


class MemoryAdapter(KVStore):
    """Thread-safe in-memory store."""

    name = "memory"

    def __init__(self):
        self._data: dict[str, str] = {}
        self._keys: list[str] = []
        self._lock = threading.Lock()

    def init(self, options: dict[str, str]) -> Result:
        if options:
            logger.warning(f"Memory adapter ignores options: {sorted(options)}")
        with self._lock:
            self._data.clear()
            self._keys.clear()
        return Result.success()

    def put(self, key: str, value: str) -> Result:
        with self._lock:
            if key not in self._data:
                bisect.insort(self._keys, key)
            self._data[key] = value
        return Result.success()

    def get(self, key: str) -> Result:
        with self._lock:
            if key in self._data:
                return Result.success()
        return Result.not_found(key)

    def remove(self, key: str) -> Result:
        with self._lock:
            if key not in self._data:
                return Result.not_found(key)
            del self._data[key]
            index = bisect.bisect_left(self._keys, key)
            del self._keys[index]
        return Result.success()

    def scan(self, start: str, end: str) -> Result:
        with self._lock:
            lo = bisect.bisect_left(self._keys, start)
            hi = bisect.bisect_left(self._keys, end)
            values = [self._data[key] for key in self._keys[lo:hi]]
        logger.debug(f"scan {start}..{end} returned {len(values)} entries")
        return Result.success()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data
