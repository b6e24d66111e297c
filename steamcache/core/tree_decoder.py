# steamcache/core/tree_decoder.py

"""Decoder for the tagged key/value stream inside each cache record.

The stream is flat: every field starts with a one-byte tag, maps are
opened by ``0x00 <key>`` and closed by ``0x08``. The decoder keeps an
explicit stack of the maps that are still open, so closing a map is a
single pop and identical key names at different depths never get mixed
up. Every record stream ends with one extra ``0x08`` that closes the
implicit root map.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from steamcache.core.byte_cursor import ByteCursor
from steamcache.core.cache_constants import TYPE_END, TYPE_MAP, TYPE_STRING, TYPE_UINT32, TYPE_UINT64
from steamcache.core.errors import TruncatedError, UnknownTagKindError
from steamcache.core.property_value import PropertyKind, PropertyValue
from steamcache.utils.i18n import t

__all__ = ["TreeDecoder", "decode_tree"]

logger = logging.getLogger("steamcache.tree")

_LEAF_AND_MAP_TAGS = frozenset({TYPE_MAP, TYPE_STRING, TYPE_UINT32, TYPE_UINT64})


class TreeDecoder:
    """Single-pass decoder turning a tagged byte stream into a map tree.

    Attributes:
        cursor (ByteCursor): Source of bytes; left positioned right after
            the tag that closed the root map.
    """

    def __init__(self, cursor: ByteCursor):
        self.cursor = cursor

    def decode(self) -> PropertyValue:
        """Decodes one root map.

        Returns:
            PropertyValue: The root map.

        Raises:
            TruncatedError: If the stream ends while a map is still open.
            UnknownTagKindError: On a tag byte with no known layout.
            InvalidUtf8Error: If a key or string value is not UTF-8.
        """
        root, root_children = _open_map()
        stack: list[dict[str, PropertyValue]] = [root_children]

        while stack:
            if self.cursor.at_end:
                raise TruncatedError(
                    self.cursor.offset,
                    detail=t("errors.tree.unclosed_maps", count=len(stack)),
                )

            tag_offset = self.cursor.offset
            tag = self.cursor.read_u8()

            if tag == TYPE_END:
                stack.pop()
                continue
            if tag not in _LEAF_AND_MAP_TAGS:
                raise UnknownTagKindError(tag, tag_offset)

            key = self.cursor.read_cstring()
            current = stack[-1]

            if tag == TYPE_MAP:
                child, children = _open_map()
                self._insert(current, key, child)
                stack.append(children)
            elif tag == TYPE_STRING:
                self._insert(current, key, PropertyValue.string(self.cursor.read_cstring()))
            elif tag == TYPE_UINT32:
                self._insert(current, key, PropertyValue.uint32(self.cursor.read_u32()))
            else:
                self._insert(current, key, PropertyValue.uint64(self.cursor.read_u64()))

        return root

    @staticmethod
    def _insert(current: dict[str, PropertyValue], key: str, value: PropertyValue) -> None:
        # Last write wins for duplicate keys within one map.
        if key in current:
            logger.debug(t("logs.tree.duplicate_key", key=key))
        current[key] = value


def _open_map() -> tuple[PropertyValue, dict[str, PropertyValue]]:
    # The node only exposes a read-only view; the decoder keeps the dict.
    children: dict[str, PropertyValue] = {}
    return PropertyValue(PropertyKind.MAP, MappingProxyType(children)), children


def decode_tree(data: bytes | bytearray | memoryview) -> PropertyValue:
    """Decodes a standalone tagged stream that must hold exactly one root map.

    Args:
        data: The encoded stream, including the final root-closing ``0x08``.

    Returns:
        PropertyValue: The root map.

    Raises:
        TruncatedError: If the stream ends early, or if bytes remain after
            the root map closed (unbalanced begin/end markers).
    """
    cursor = ByteCursor(data)
    root = TreeDecoder(cursor).decode()
    if not cursor.at_end:
        raise TruncatedError(
            cursor.offset,
            detail=t("errors.tree.trailing_bytes", count=cursor.remaining),
        )
    return root
