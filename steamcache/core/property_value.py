# steamcache/core/property_value.py

"""Node type of a decoded cache tree.

A ``PropertyValue`` is a tagged union of an unsigned 32-bit integer, an
unsigned 64-bit integer, a string, or a map of string keys to further
``PropertyValue`` nodes. Trees are built once by the decoder and only read
afterwards: the node is frozen and map payloads are read-only
``MappingProxyType`` views, so a loaded tree cannot be changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

__all__ = ["PropertyKind", "PropertyValue"]

_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF


class PropertyKind(Enum):
    """Variant tag of a ``PropertyValue``."""

    UINT32 = "uint32"
    UINT64 = "uint64"
    STRING = "string"
    MAP = "map"


@dataclass(frozen=True, eq=False)
class PropertyValue:
    """One node of a decoded property tree.

    Use the classmethod constructors rather than the dataclass initializer;
    they validate the payload against the kind.

    Attributes:
        kind: Which variant this node holds.
        value: The payload (int, str, or read-only mapping of child nodes).
    """

    kind: PropertyKind
    value: int | str | Mapping[str, PropertyValue]

    # ===== CONSTRUCTORS =====

    @classmethod
    def uint32(cls, value: int) -> PropertyValue:
        if not 0 <= value <= _U32_MAX:
            raise ValueError(f"uint32 out of range: {value}")
        return cls(PropertyKind.UINT32, value)

    @classmethod
    def uint64(cls, value: int) -> PropertyValue:
        if not 0 <= value <= _U64_MAX:
            raise ValueError(f"uint64 out of range: {value}")
        return cls(PropertyKind.UINT64, value)

    @classmethod
    def string(cls, value: str) -> PropertyValue:
        return cls(PropertyKind.STRING, value)

    @classmethod
    def map(cls, children: Mapping[str, PropertyValue] | None = None) -> PropertyValue:
        """Builds a map node from a copy of ``children``."""
        return cls(PropertyKind.MAP, MappingProxyType(dict(children or {})))

    # ===== PREDICATES =====

    @property
    def is_map(self) -> bool:
        return self.kind is PropertyKind.MAP

    @property
    def is_string(self) -> bool:
        return self.kind is PropertyKind.STRING

    @property
    def is_uint32(self) -> bool:
        return self.kind is PropertyKind.UINT32

    @property
    def is_uint64(self) -> bool:
        return self.kind is PropertyKind.UINT64

    # ===== NARROWING ACCESSORS =====

    def as_map(self) -> Mapping[str, PropertyValue] | None:
        """Returns the read-only child mapping, or None if this is a leaf."""
        return self.value if self.is_map else None

    def as_string(self) -> str | None:
        return self.value if self.is_string else None

    def as_uint32(self) -> int | None:
        return self.value if self.is_uint32 else None

    def as_uint64(self) -> int | None:
        return self.value if self.is_uint64 else None

    # ===== MAP CONVENIENCE =====

    def get(self, key: str) -> PropertyValue | None:
        """Returns the child under ``key``; None if absent or not a map."""
        if not self.is_map:
            return None
        return self.value.get(key)

    def keys(self) -> list[str]:
        return list(self.value) if self.is_map else []

    def items(self) -> list[tuple[str, PropertyValue]]:
        return list(self.value.items()) if self.is_map else []

    def depth(self) -> int:
        """Number of nested map levels below this node (0 for a flat map or a leaf)."""
        if not self.is_map:
            return 0
        deepest = 0
        pending = [(self, 0)]
        while pending:
            node, level = pending.pop()
            deepest = max(deepest, level)
            pending.extend((child, level + 1) for child in node.value.values() if child.is_map)
        return deepest

    def __contains__(self, key: object) -> bool:
        return self.is_map and key in self.value

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.value) if self.is_map else 0

    def __bool__(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyValue):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left.kind is not right.kind:
                return False
            if not left.is_map:
                if left.value != right.value:
                    return False
                continue
            if left.value.keys() != right.value.keys():
                return False
            pending.extend((child, right.value[key]) for key, child in left.value.items())
        return True

    def __hash__(self) -> int:
        if self.is_map:
            return hash((self.kind, tuple(sorted(self.value))))
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        if self.is_map:
            return f"PropertyValue.map({len(self.value)} keys)"
        return f"PropertyValue.{self.kind.value}({self.value!r})"
