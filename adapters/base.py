"""Store capability contract consumed by the benchmark engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class ResultCode(str, Enum):
    """Outcome of a store call."""
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class Result:
    """Status returned by every store operation."""

    code: ResultCode = ResultCode.OK
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code is ResultCode.OK

    @property
    def is_not_found(self) -> bool:
        return self.code is ResultCode.NOT_FOUND

    @classmethod
    def success(cls) -> "Result":
        return _OK

    @classmethod
    def not_found(cls, message: str = "") -> "Result":
        return cls(ResultCode.NOT_FOUND, message)

    @classmethod
    def error(cls, message: str = "") -> "Result":
        return cls(ResultCode.ERROR, message)

    def __str__(self) -> str:
        if self.message:
            return f"{self.code.value}: {self.message}"
        return self.code.value


_OK = Result()


class KVStore(ABC):
    """Key-value store adapter.

    Implementations must tolerate concurrent calls from every worker
    thread of a workload phase; the engine does no locking of its own.
    """

    name: str = "kvstore"

    @abstractmethod
    def init(self, options: dict[str, str]) -> Result:
        """One-time setup with adapter-specific options (prefix stripped)."""

    @abstractmethod
    def put(self, key: str, value: str) -> Result:
        """Insert or overwrite a key."""

    @abstractmethod
    def get(self, key: str) -> Result:
        """Look up a key. Only success or failure is reported."""

    @abstractmethod
    def remove(self, key: str) -> Result:
        """Delete a key."""

    @abstractmethod
    def scan(self, start: str, end: str) -> Result:
        """Iterate keys in ``[start, end)``."""

    def close(self) -> None:
        """Release resources held by the adapter."""
