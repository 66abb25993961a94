"""Collapse nested extraction results into a single-level mapping."""

from typing import Any


def flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested dicts into underscore-joined keys.

    ``{"a": {"b": 1}}`` becomes ``{"a_b": 1}``.  Lists, scalars and None pass
    through unchanged.  Already-flat input is returned as an equal dict.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        out_key = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten(value, out_key))
        else:
            flat[out_key] = value
    return flat
