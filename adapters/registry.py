"""Adapter registry mapping names to store factories."""

from __future__ import annotations

import logging
from typing import Callable

from adapters.base import KVStore
from common.errors import AdapterNotFoundError

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[], KVStore]


class AdapterRegistry:
    """Named store factories.

    A registry is an ordinary value: build one at startup, let plugins
    add to it, then pass it to whatever needs to create stores.
    """

    def __init__(self):
        self._factories: dict[str, AdapterFactory] = {}

    def register(self, name: str, factory: AdapterFactory) -> None:
        """Register a factory, replacing any previous one with the same name."""
        if name in self._factories:
            logger.warning(f"Replacing adapter registration: {name}")
        self._factories[name] = factory
        logger.debug(f"Registered adapter: {name}")

    def create(self, name: str) -> KVStore:
        """Instantiate the adapter registered under ``name``."""
        try:
            factory = self._factories[name]
        except KeyError:
            raise AdapterNotFoundError(name) from None
        return factory()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def _create_redis() -> KVStore:
    # Imported lazily so the redis client is only loaded when used
    from adapters.redis_adapter import RedisAdapter
    return RedisAdapter()


def register_builtin_adapters(registry: AdapterRegistry) -> None:
    """Register the adapters shipped with the harness."""
    from adapters.dummy import DummyAdapter
    from adapters.memory import MemoryAdapter
    from adapters.sqlite_adapter import SQLiteAdapter

    registry.register("dummy", DummyAdapter)
    registry.register("memory", MemoryAdapter)
    registry.register("sqlite", SQLiteAdapter)
    registry.register("redis", _create_redis)


def default_registry() -> AdapterRegistry:
    """Create a registry holding the built-in adapters."""
    registry = AdapterRegistry()
    register_builtin_adapters(registry)
    return registry
