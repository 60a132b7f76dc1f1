"""Raw benchmark options split into global and adapter-specific maps."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from common.errors import ConfigurationError
from common.utils import flatten_options

logger = logging.getLogger(__name__)

ADAPTER_KEY = "adapter"


class Options:
    """Holds ``key=value`` options and the selected adapter name.

    Keys prefixed with ``<adapter>-`` belong to the adapter and are handed
    to it with the prefix removed; everything else is a global option.
    """

    def __init__(self, adapter: str = "", options: Optional[Mapping[str, str]] = None):
        self.adapter = adapter
        self._options: dict[str, str] = dict(options or {})

    @classmethod
    def parse(cls, argv: Iterable[str], default_adapter: str = "") -> "Options":
        """Parse ``--key=value`` arguments.

        Arguments not starting with ``--`` or without ``=`` are ignored.
        """
        adapter = ""
        options: dict[str, str] = {}
        for arg in argv:
            if not arg.startswith("--"):
                continue
            key, sep, value = arg[2:].partition("=")
            if not sep:
                logger.debug(f"Ignoring option without value: {arg}")
                continue
            if key == ADAPTER_KEY:
                adapter = value
            else:
                options[key] = value

        adapter = adapter or default_adapter
        if not adapter:
            raise ConfigurationError("No adapter provided in the options.")
        return cls(adapter, options)

    @classmethod
    def from_mapping(cls, data: Mapping, default_adapter: str = "") -> "Options":
        """Build options from a (YAML-loaded) mapping.

        A nested section named after the adapter is flattened into
        prefixed keys, e.g. ``{"sqlite": {"path": "x"}}`` -> ``sqlite-path``.
        """
        flat = flatten_options(dict(data))
        adapter = flat.pop(ADAPTER_KEY, "") or default_adapter
        return cls(adapter, flat)

    def merged(self, override: "Options") -> "Options":
        """Return a copy with ``override``'s values taking precedence."""
        options = dict(self._options)
        options.update(override._options)
        return Options(override.adapter or self.adapter, options)

    @property
    def prefix(self) -> str:
        return f"{self.adapter}-"

    def global_options(self) -> dict[str, str]:
        return {
            key: value for key, value in self._options.items()
            if not key.startswith(self.prefix)
        }

    def adapter_options(self) -> dict[str, str]:
        return {
            key[len(self.prefix):]: value for key, value in self._options.items()
            if key.startswith(self.prefix)
        }

    def __repr__(self) -> str:
        return f"Options(adapter={self.adapter!r}, options={self._options!r})"
