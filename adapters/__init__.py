"""Storage adapters and the registry used to locate them."""

from adapters.base import KVStore, Result, ResultCode
from adapters.registry import AdapterRegistry, default_registry, register_builtin_adapters
from adapters.loader import load_plugins

__all__ = [
    "KVStore",
    "Result",
    "ResultCode",
    "AdapterRegistry",
    "default_registry",
    "register_builtin_adapters",
    "load_plugins",
]
