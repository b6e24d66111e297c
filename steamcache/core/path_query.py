# steamcache/core/path_query.py

"""Read-only path lookups over decoded property trees.

A path is an ordered sequence of map keys, e.g. ``["appinfo", "common",
"name"]``. Lookups never raise for a missing or mistyped path; they return
None, which lets callers read optional fields without guarding each step.
"""

from __future__ import annotations

from typing import Mapping, Sequence, Union

from steamcache.core.property_value import PropertyValue

__all__ = [
    "PathLike",
    "PropertyQueryMixin",
    "format_entry",
    "lookup",
    "lookup_map",
    "lookup_string",
    "lookup_u32",
    "lookup_u64",
]

PathLike = Union[str, Sequence[str]]


def _segments(path: PathLike) -> Sequence[str]:
    if isinstance(path, str):
        return (path,)
    return path


def lookup(tree: PropertyValue, path: PathLike) -> PropertyValue | None:
    """Walks ``tree`` along ``path``.

    Args:
        tree: Root map to start from.
        path: Key segments; a bare string is a single segment.

    Returns:
        PropertyValue | None: The node at the path (leaf or map), or None if
        a segment is missing, a leaf is reached before the last segment, or
        the path is empty.
    """
    segments = _segments(path)
    if not segments:
        return None

    current = tree
    for segment in segments:
        children = current.as_map()
        if children is None:
            # A terminal value cannot have children.
            return None
        current = children.get(segment)
        if current is None:
            return None
    return current


def lookup_string(tree: PropertyValue, path: PathLike) -> str | None:
    value = lookup(tree, path)
    return value.as_string() if value is not None else None


def lookup_u32(tree: PropertyValue, path: PathLike) -> int | None:
    value = lookup(tree, path)
    return value.as_uint32() if value is not None else None


def lookup_u64(tree: PropertyValue, path: PathLike) -> int | None:
    value = lookup(tree, path)
    return value.as_uint64() if value is not None else None


def lookup_map(tree: PropertyValue, path: PathLike) -> Mapping[str, PropertyValue] | None:
    value = lookup(tree, path)
    return value.as_map() if value is not None else None


def format_entry(tree: PropertyValue, path: PathLike) -> str:
    """Renders the value at ``path`` as display text.

    Returns:
        str: "None" when absent, "(map)" for maps, otherwise the value itself.
    """
    value = lookup(tree, path)
    if value is None:
        return "None"
    if value.is_map:
        return "(map)"
    return str(value.value)


class PropertyQueryMixin:
    """Path lookups for any object exposing its root map as ``self.tree``."""

    tree: PropertyValue

    def lookup(self, path: PathLike) -> PropertyValue | None:
        return lookup(self.tree, path)

    def string_entry(self, path: PathLike) -> str | None:
        return lookup_string(self.tree, path)

    def u32_entry(self, path: PathLike) -> int | None:
        return lookup_u32(self.tree, path)

    def u64_entry(self, path: PathLike) -> int | None:
        return lookup_u64(self.tree, path)

    def map_entry(self, path: PathLike) -> Mapping[str, PropertyValue] | None:
        return lookup_map(self.tree, path)

    def format_entry(self, path: PathLike) -> str:
        return format_entry(self.tree, path)
