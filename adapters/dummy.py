"""No-op adapter, useful for measuring harness overhead."""

from __future__ import annotations

import logging

from adapters.base import KVStore, Result

logger = logging.getLogger(__name__)


class DummyAdapter(KVStore):
    """Accepts every call and stores nothing."""

    name = "dummy"

    def init(self, options: dict[str, str]) -> Result:
        logger.info(f"Dummy adapter initialized with options: {options}")
        return Result.success()

    def put(self, key: str, value: str) -> Result:
        logger.debug(f"put key={key} value_len={len(value)}")
        return Result.success()

    def get(self, key: str) -> Result:
        logger.debug(f"get key={key}")
        return Result.success()

    def remove(self, key: str) -> Result:
        logger.debug(f"remove key={key}")
        return Result.success()

    def scan(self, start: str, end: str) -> Result:
        logger.debug(f"scan start={start} end={end}")
        return Result.success()
