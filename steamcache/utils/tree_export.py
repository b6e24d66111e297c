"""Human-readable renderings of decoded property trees.

Used for debugging and manual inspection of cache records. ``dump_tree``
produces Valve's text KeyValues format through the ``vdf`` library, the
same layout Steam itself uses for its text ``.vdf`` files.
"""

from __future__ import annotations

from typing import Any

import vdf

from steamcache.core.property_value import PropertyValue

__all__ = ["MAP_PLACEHOLDER", "describe_tree", "dump_tree", "to_plain"]

MAP_PLACEHOLDER = "(map)"


def to_plain(value: PropertyValue, max_depth: int | None = None) -> Any:
    """Converts a property tree to nested dicts, strings and ints.

    Args:
        value: Root node to convert.
        max_depth: Number of map levels below ``value`` to expand; deeper
            maps are replaced by ``MAP_PLACEHOLDER``. None expands everything.

    Returns:
        A dict for maps, otherwise the leaf's str or int.
    """
    if not value.is_map:
        return value.value
    if max_depth is not None and max_depth < 0:
        return MAP_PLACEHOLDER

    root: dict[str, Any] = {}
    pending = [(value, root, max_depth)]
    while pending:
        node, out, depth = pending.pop()
        next_depth = None if depth is None else depth - 1
        for key, child in node.items():
            if not child.is_map:
                out[key] = child.value
            elif next_depth is not None and next_depth < 0:
                out[key] = MAP_PLACEHOLDER
            else:
                out[key] = {}
                pending.append((child, out[key], next_depth))
    return root


def dump_tree(value: PropertyValue, max_depth: int | None = None) -> str:
    """Renders a property map as text VDF.

    ``vdf.dumps`` recurses once per map level, so very deep trees should
    be cut off with ``max_depth``.

    Args:
        value: A map node (records expose theirs as ``record.tree``).
        max_depth: See ``to_plain``.

    Returns:
        str: The text VDF document.

    Raises:
        TypeError: If ``value`` is a leaf.
    """
    if not value.is_map:
        raise TypeError(f"dump_tree expects a map, got {value.kind.value}")
    return vdf.dumps(_as_text(to_plain(value, max_depth)), pretty=True)


def _as_text(plain: dict[str, Any]) -> dict[str, Any]:
    # Text VDF has no integer type.
    root: dict[str, Any] = {}
    pending = [(plain, root)]
    while pending:
        source, out = pending.pop()
        for key, child in source.items():
            if isinstance(child, dict):
                out[key] = {}
                pending.append((child, out[key]))
            else:
                out[key] = str(child)
    return root


def describe_tree(value: PropertyValue, max_depth: int = 1000, prefix: str = "") -> list[str]:
    """Lists a tree one key per line, nested keys indented by tabs.

    Maps show as ``key (map)``; leaves as ``key value``. Children of maps
    more than ``max_depth`` levels down are omitted.
    """
    lines: list[str] = []
    stack = [(iter(value.items()), prefix, max_depth)]
    while stack:
        entries, indent, depth = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue
        key, child = entry
        if child.is_map:
            lines.append(f"{indent}{key} {MAP_PLACEHOLDER}")
            if depth > 0:
                stack.append((iter(child.items()), indent + "\t", depth - 1))
        else:
            lines.append(f"{indent}{key} {child.value}")
    return lines
