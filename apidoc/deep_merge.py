"""Logic for deep merging configuration dictionaries."""

from typing import Any

# Lists that accumulate across config layers instead of being replaced
ADDITIVE_KEYS = {"exclude"}


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Arrays in 'update' replace 'base' arrays, except the additive keys
      (e.g. 'sources.exclude') which are unioned and sorted.
    """
    result = base.copy()
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif (
            key in ADDITIVE_KEYS
            and isinstance(value, list)
            and isinstance(result.get(key), list)
        ):
            result[key] = sorted(set(result[key]) | set(value))
        else:
            result[key] = value
    return result
