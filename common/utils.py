"""Common utility functions."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def padded_key(index: int, width: int) -> str:
    """Format a key index as a zero-padded decimal string.

    The result is never truncated: indexes with more digits than
    ``width`` are returned unpadded.
    """
    return str(index).zfill(width)


def parse_bool(value: Any, default: bool = False) -> bool:
    """Parse a boolean option value (e.g., 'true', '0', 'on')."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value}")


def format_size(bytes_val: int, precision: int = 2) -> str:
    """Format bytes to human-readable string."""
    if bytes_val < 0:
        return "0 B"

    units = ['B', 'KB', 'MB', 'GB', 'TB', 'PB']
    unit_index = 0
    size = float(bytes_val)

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    return f"{size:.{precision}f} {units[unit_index]}"


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file."""
    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def flatten_options(data: dict, separator: str = "-") -> dict[str, str]:
    """Flatten nested option sections into prefixed string keys.

    ``{"sqlite": {"path": "x.db"}, "num": 10}`` becomes
    ``{"sqlite-path": "x.db", "num": "10"}``. Lists are joined with commas.
    """
    flat: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in flatten_options(value, separator).items():
                flat[f"{key}{separator}{sub_key}"] = sub_value
        elif isinstance(value, (list, tuple)):
            flat[str(key)] = ",".join(str(v) for v in value)
        elif isinstance(value, bool):
            flat[str(key)] = "true" if value else "false"
        else:
            flat[str(key)] = str(value)
    return flat


def ensure_dir(path: str | Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
