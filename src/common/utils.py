"""Common utility functions."""

from typing import Any


def get_value(obj: Any, key: str) -> Any:
    """Get value from dict or object attribute."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def get_text(obj: Any, key: str) -> str:
    """Get a string field, treating missing or non-string values as empty."""
    value = get_value(obj, key)
    if not isinstance(value, str):
        return ""
    return value.strip()
