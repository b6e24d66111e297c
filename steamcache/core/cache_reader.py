# steamcache/core/cache_reader.py

"""Whole-file readers for Steam's appinfo.vdf and packageinfo.vdf.

Both files share an 8-byte header::

    u8      major version   (0x24, 0x26, 0x27 or 0x28)
    u16 BE  magic           (0x4456 appinfo, 0x5556 packageinfo)
    u8      minor version   (0x06 or 0x07)
    u32 LE  format version  (always 1)

followed by records until a sentinel id: 0 for appinfo, 0xFFFFFFFF for
packageinfo. Appinfo records carry a byte length after their id;
packageinfo records do not.

A load either returns every record or raises; there is no partial result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Iterator, TypeVar

from steamcache.core.byte_cursor import ByteCursor
from steamcache.core.cache_constants import (
    APPINFO_FORMAT,
    FORMAT_VERSION,
    PACKAGEINFO_FORMAT,
    VALID_MAJOR_VERSIONS,
    VALID_MINOR_VERSIONS,
    CacheFormat,
)
from steamcache.core.errors import (
    BadFormatVersionError,
    BadMagicError,
    CacheError,
    CacheIOError,
    UnsupportedVersionError,
)
from steamcache.core.records import AppRecord, PackageRecord, decode_app_record, decode_package_record
from steamcache.utils.i18n import t

__all__ = [
    "AppInfoCache",
    "CacheHeader",
    "PackageInfoCache",
    "load_appinfo",
    "load_packageinfo",
    "read_appinfo",
    "read_packageinfo",
    "read_header",
]

logger = logging.getLogger("steamcache.cache")

RecordT = TypeVar("RecordT", AppRecord, PackageRecord)


@dataclass(frozen=True)
class CacheHeader:
    """Decoded 8-byte file header.

    Attributes:
        major_version: Leading version byte.
        magic: Big-endian signature.
        minor_version: Fourth header byte.
        format_version: Trailing 4-byte format field.
    """

    major_version: int
    magic: int
    minor_version: int
    format_version: int


def read_header(cursor: ByteCursor, cache_format: CacheFormat) -> CacheHeader:
    """Reads and validates the file header.

    Args:
        cursor: Cursor at the start of the file.
        cache_format: Constants of the expected cache kind.

    Returns:
        CacheHeader: The validated header.

    Raises:
        UnsupportedVersionError: If a version byte is not recognized.
        BadMagicError: If the signature does not match ``cache_format``.
        BadFormatVersionError: If the format field is not 1.
        TruncatedError: If the buffer is shorter than a header.
    """
    major_version = cursor.read_u8()
    if major_version not in VALID_MAJOR_VERSIONS:
        raise UnsupportedVersionError("major", major_version)

    magic = cursor.read_u16_be()
    if magic != cache_format.magic:
        raise BadMagicError(magic, cache_format.magic)

    minor_version = cursor.read_u8()
    if minor_version not in VALID_MINOR_VERSIONS:
        raise UnsupportedVersionError("minor", minor_version)

    format_version = cursor.read_u32()
    if format_version != FORMAT_VERSION:
        raise BadFormatVersionError(format_version)

    return CacheHeader(major_version, magic, minor_version, format_version)


class _RecordCache(Generic[RecordT]):
    """Ordered, immutable sequence of records read from one buffer.

    Subclasses supply the format constants and how a single record is
    decoded once its id has been read.
    """

    FORMAT: CacheFormat

    def __init__(self, header: CacheHeader, records: tuple[RecordT, ...]):
        self.header = header
        self.records = records
        self._by_id: dict[int, RecordT] = {record.record_id: record for record in records}

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview):
        """Decodes a whole cache file held in memory.

        Args:
            data: The complete file contents.

        Returns:
            The decoded cache.

        Raises:
            CacheError: Any header or record decoding failure.
        """
        cursor = ByteCursor(data)
        header = read_header(cursor, cls.FORMAT)
        decode = cls._record_decoder(header)

        records: list[RecordT] = []
        while True:
            record_id = cursor.read_u32()
            if record_id == cls.FORMAT.sentinel_id:
                break
            try:
                records.append(decode(record_id, cursor))
            except CacheError as e:
                logger.warning(
                    t("logs.cache.record_failed", kind=cls.FORMAT.kind.value, record_id=record_id, error=e)
                )
                raise

        if not cursor.at_end:
            logger.debug(t("logs.cache.trailing_bytes", count=cursor.remaining))

        logger.info(
            t(
                "logs.cache.loaded",
                kind=cls.FORMAT.kind.value,
                major=f"0x{header.major_version:02X}",
                minor=f"0x{header.minor_version:02X}",
                count=len(records),
            )
        )
        return cls(header, tuple(records))

    @classmethod
    def from_path(cls, path: Path | str):
        """Reads and decodes a cache file.

        Args:
            path: Location of the file; there is no default.

        Raises:
            CacheIOError: If the file cannot be read.
            CacheError: Any header or record decoding failure.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error(t("logs.cache.read_error", path=str(path), error=e))
            raise CacheIOError(path, e) from e
        logger.debug(t("logs.cache.read_file", path=str(path), size=len(data)))
        return cls.from_bytes(data)

    @classmethod
    def _record_decoder(cls, header: CacheHeader) -> Callable[[int, ByteCursor], RecordT]:
        raise NotImplementedError

    # ===== SEQUENCE ACCESS =====

    @property
    def major_version(self) -> int:
        return self.header.major_version

    def get(self, record_id: int) -> RecordT | None:
        """Returns the record with ``record_id``, or None."""
        return self._by_id.get(record_id)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self.records)

    def __getitem__(self, index: int) -> RecordT:
        return self.records[index]

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._by_id

    def __repr__(self) -> str:
        return f"<{type(self).__name__} v0x{self.header.major_version:02X} with {len(self.records)} records>"


class AppInfoCache(_RecordCache[AppRecord]):
    """Decoded appinfo.vdf."""

    FORMAT = APPINFO_FORMAT

    @classmethod
    def _record_decoder(cls, header: CacheHeader) -> Callable[[int, ByteCursor], AppRecord]:
        def decode(app_id: int, cursor: ByteCursor) -> AppRecord:
            size = cursor.read_u32()
            return decode_app_record(app_id, cursor.slice(size))

        return decode


class PackageInfoCache(_RecordCache[PackageRecord]):
    """Decoded packageinfo.vdf."""

    FORMAT = PACKAGEINFO_FORMAT

    @classmethod
    def _record_decoder(cls, header: CacheHeader) -> Callable[[int, ByteCursor], PackageRecord]:
        def decode(package_id: int, cursor: ByteCursor) -> PackageRecord:
            return decode_package_record(package_id, cursor, header.major_version)

        return decode


# ===== SIMPLE API =====


def load_appinfo(data: bytes | bytearray | memoryview) -> list[AppRecord]:
    """Decodes appinfo.vdf contents into its ordered records."""
    return list(AppInfoCache.from_bytes(data))


def load_packageinfo(data: bytes | bytearray | memoryview) -> list[PackageRecord]:
    """Decodes packageinfo.vdf contents into its ordered records."""
    return list(PackageInfoCache.from_bytes(data))


def read_appinfo(path: Path | str) -> AppInfoCache:
    """Reads appinfo.vdf from an explicit path."""
    return AppInfoCache.from_path(path)


def read_packageinfo(path: Path | str) -> PackageInfoCache:
    """Reads packageinfo.vdf from an explicit path."""
    return PackageInfoCache.from_path(path)
