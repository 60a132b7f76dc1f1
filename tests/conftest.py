"""Pytest configuration and shared fixtures."""

import io
import threading
import time
from pathlib import Path
from typing import Optional

import pytest

from adapters.base import KVStore, Result
from bench.engine import WorkloadEngine
from bench.options import Options


class CountingStore(KVStore):
    """Stub store that counts and timestamps every call."""

    name = "counting"

    def __init__(self, get_result: Optional[Result] = None, init_result: Optional[Result] = None):
        self.get_result = get_result or Result.success()
        self.init_result = init_result or Result.success()
        self.init_calls: list[dict] = []
        self.calls: list[tuple[str, str, float]] = []
        self.closed = 0
        self._lock = threading.Lock()

    def _record(self, op: str, key: str) -> None:
        with self._lock:
            self.calls.append((op, key, time.perf_counter()))

    def count(self, op: str) -> int:
        return sum(1 for call in self.calls if call[0] == op)

    def timestamps(self, op: str) -> list[float]:
        return [ts for name, _, ts in self.calls if name == op]

    def keys(self, op: str) -> list[str]:
        return [key for name, key, _ in self.calls if name == op]

    def init(self, options: dict[str, str]) -> Result:
        self.init_calls.append(dict(options))
        return self.init_result

    def put(self, key: str, value: str) -> Result:
        self._record("put", key)
        return Result.success()

    def get(self, key: str) -> Result:
        self._record("get", key)
        return self.get_result

    def remove(self, key: str) -> Result:
        self._record("remove", key)
        return Result.success()

    def scan(self, start: str, end: str) -> Result:
        self._record("scan", start)
        return Result.success()

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def counting_store() -> CountingStore:
    """A stub store recording every call."""
    return CountingStore()


@pytest.fixture
def output() -> io.StringIO:
    """Buffer capturing engine reports."""
    return io.StringIO()


@pytest.fixture
def engine(output) -> WorkloadEngine:
    """Engine with a small value pool to keep tests fast."""
    return WorkloadEngine(value_pool_size=4096, stream=output)


@pytest.fixture
def make_options():
    """Factory for Options bound to the counting adapter."""
    def _make(adapter: str = "counting", **options) -> Options:
        return Options(adapter, {k: str(v) for k, v in options.items()})
    return _make


@pytest.fixture
def plugin_dir(tmp_path: Path) -> Path:
    """Empty directory for adapter plugins."""
    path = tmp_path / "plugins"
    path.mkdir()
    return path


@pytest.fixture
def store_factory():
    """The CountingStore class, for tests needing custom results."""
    return CountingStore
