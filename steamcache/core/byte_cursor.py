# steamcache/core/byte_cursor.py

"""Bounds-checked sequential reader over an in-memory byte buffer."""

from __future__ import annotations

import struct

from steamcache.core.errors import InvalidUtf8Error, TruncatedError
from steamcache.utils.i18n import t

__all__ = ["ByteCursor"]

_U16_BE = struct.Struct(">H")
_U32_LE = struct.Struct("<I")
_U64_LE = struct.Struct("<Q")


class ByteCursor:
    """Reads fixed-width integers and C strings, advancing an offset.

    Offsets are absolute positions in the underlying buffer, so errors
    raised from a sub-cursor still point at the right place in the file.

    Attributes:
        offset (int): Position of the next byte to read.
        end (int): Exclusive upper bound for reads.
    """

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0, end: int | None = None):
        self._data = data if isinstance(data, bytes) else bytes(data)
        self.offset = offset
        self.end = len(self._data) if end is None else min(end, len(self._data))

    # ===== STATE =====

    @property
    def remaining(self) -> int:
        """Number of bytes left before ``end``."""
        return max(self.end - self.offset, 0)

    @property
    def at_end(self) -> bool:
        return self.offset >= self.end

    def _require(self, size: int) -> None:
        if self.offset + size > self.end:
            raise TruncatedError(self.offset, size)

    # ===== READ PRIMITIVES =====

    def read_u8(self) -> int:
        """Reads a single byte."""
        self._require(1)
        value = self._data[self.offset]
        self.offset += 1
        return value

    def read_u16_be(self) -> int:
        """Reads a big-endian unsigned 16-bit integer."""
        self._require(2)
        value = _U16_BE.unpack_from(self._data, self.offset)[0]
        self.offset += 2
        return value

    def read_u32(self) -> int:
        """Reads a little-endian unsigned 32-bit integer."""
        self._require(4)
        value = _U32_LE.unpack_from(self._data, self.offset)[0]
        self.offset += 4
        return value

    def read_u64(self) -> int:
        """Reads a little-endian unsigned 64-bit integer."""
        self._require(8)
        value = _U64_LE.unpack_from(self._data, self.offset)[0]
        self.offset += 8
        return value

    def read_bytes(self, size: int) -> bytes:
        """Reads ``size`` raw bytes."""
        self._require(size)
        value = self._data[self.offset:self.offset + size]
        self.offset += size
        return value

    def read_cstring(self) -> str:
        """Reads a null-terminated UTF-8 string.

        Returns:
            str: The decoded string, without its terminator.

        Raises:
            TruncatedError: If no terminator occurs before ``end``.
            InvalidUtf8Error: If the bytes are not valid UTF-8.
        """
        start = self.offset
        end = self._data.find(b"\x00", start, self.end)
        if end == -1:
            raise TruncatedError(start, detail=t("errors.decode.unterminated_string"))

        raw = self._data[start:end]
        try:
            value = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8Error(start, e) from e

        self.offset = end + 1
        return value

    # ===== SUB-RANGES =====

    def slice(self, size: int) -> ByteCursor:
        """Splits off the next ``size`` bytes as a bounded cursor.

        This cursor skips past the returned range.

        Args:
            size (int): Length of the sub-range.

        Returns:
            ByteCursor: A cursor that cannot read beyond the sub-range.
        """
        self._require(size)
        sub = ByteCursor(self._data, self.offset, self.offset + size)
        self.offset += size
        return sub

    def __repr__(self) -> str:
        return f"<ByteCursor offset={self.offset} end={self.end}>"
