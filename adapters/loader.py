"""Directory-based adapter plugin loading.

A plugin is a Python file exposing ``register_adapters(registry)``::

    def register_adapters(registry):
        registry.register("mystore", MyStoreAdapter)
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from adapters.registry import AdapterRegistry

logger = logging.getLogger(__name__)

REGISTER_HOOK = "register_adapters"


def load_plugins(registry: AdapterRegistry, plugin_dir: str | Path) -> list[str]:
    """Import every ``*.py`` file in ``plugin_dir`` and run its hook.

    Broken plugins are logged and skipped. Returns the module names whose
    hook ran successfully.
    """
    plugin_dir = Path(plugin_dir)
    if not plugin_dir.is_dir():
        logger.error(f"Cannot open plugin directory: {plugin_dir}")
        return []

    loaded = []
    for path in sorted(plugin_dir.glob("*.py")):
        if path.name.startswith("_"):
            continue

        module_name = f"kvbench_plugin_{path.stem}"
        try:
            spec = importlib.util.spec_from_file_location(module_name, path)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except Exception as e:
            logger.error(f"Error loading {path}: {e}", exc_info=True)
            continue

        hook = getattr(module, REGISTER_HOOK, None)
        if not callable(hook):
            logger.warning(f"No {REGISTER_HOOK} function in {path}")
            continue

        try:
            hook(registry)
        except Exception as e:
            logger.error(f"{REGISTER_HOOK} failed in {path}: {e}", exc_info=True)
            continue

        loaded.append(path.stem)
        logger.info(f"Loaded adapter plugin: {path.name}")

    return loaded
