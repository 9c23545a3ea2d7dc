"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
One-level merge of specification documents.

For every top level key of the new document:

- a list is appended to the existing value (which is wrapped in a list when
  it is not one); duplicates are kept
- a mapping is combined with an existing mapping one level deep, the new
  entries replacing existing entries of the same name
- anything else replaces the existing value

Nothing below the second level is ever merged. ``paths./a`` from two
documents is not combined: the later ``/a`` replaces the earlier one.
"""

from collections.abc import Mapping
from typing import Any


def merge_documents(old: Mapping[str, Any] | None, new: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Merge new into old and return the result.

    Neither argument is modified.

    Args:
        old: Document being overridden
        new: Document whose values win

    Returns:
        Dict[str, Any]: The merged document

    """
    result = dict(old or {})
    if not new:
        return result

    for key, value in new.items():
        existing = result.get(key)
        if existing is not None and is_array_like(value):
            result[key] = coerce_to_list(existing) + list(value)
        elif isinstance(existing, Mapping) and isinstance(value, Mapping):
            result[key] = {**existing, **value}
        else:
            result[key] = value

    return result


def is_array_like(value: Any) -> bool:
    """Return True for ordered sequences (lists and tuples, not strings)."""
    return isinstance(value, (list, tuple))


def coerce_to_list(value: Any) -> list[Any]:
    """Wrap a value in a list unless it already is an ordered sequence."""
    if is_array_like(value):
        return list(value)
    return [value]
