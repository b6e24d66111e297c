# steamcache/core/errors.py

"""Exceptions raised while reading Steam's binary caches.

Every failure is terminal for the ``load`` call that hit it: the formats
carry no resynchronization markers, so a corrupt record invalidates the
whole file.
"""

from __future__ import annotations

from pathlib import Path

from steamcache.utils.i18n import t

__all__ = [
    "BadFormatVersionError",
    "BadMagicError",
    "CacheError",
    "CacheIOError",
    "InvalidUtf8Error",
    "MalformedWrapperError",
    "TruncatedError",
    "UnknownTagKindError",
    "UnsupportedVersionError",
]


class CacheError(Exception):
    """Base class for all cache decoding failures."""


class CacheIOError(CacheError, OSError):
    """Raised when a cache file cannot be opened or read.

    Attributes:
        path: The file that failed to load.
    """

    def __init__(self, path: Path | str, reason: object):
        self.path = Path(path)
        super().__init__(t("errors.cache.io", path=self.path, reason=reason))


class UnsupportedVersionError(CacheError):
    """Raised when a header version byte is not in the known allow-list.

    Attributes:
        field: Which header byte was rejected ("major" or "minor").
        version: The value that was read.
    """

    def __init__(self, field: str, version: int):
        self.field = field
        self.version = version
        super().__init__(t("errors.cache.unsupported_version", field=field, version=version))


class BadMagicError(CacheError):
    """Raised when the 2-byte signature does not match the cache kind.

    Attributes:
        magic: The signature that was read.
        expected: The signature the cache kind requires.
    """

    def __init__(self, magic: int, expected: int):
        self.magic = magic
        self.expected = expected
        super().__init__(t("errors.cache.bad_magic", magic=magic, expected=expected))


class BadFormatVersionError(CacheError):
    """Raised when the 4-byte format version is not 1.

    Attributes:
        version: The value that was read.
    """

    def __init__(self, version: int):
        self.version = version
        super().__init__(t("errors.cache.bad_format_version", version=version))


class TruncatedError(CacheError):
    """Raised when the buffer ends in the middle of a field or an open map.

    Attributes:
        offset: Absolute buffer offset where the read was attempted.
        needed: Number of bytes the read required, or None if unknown.
    """

    def __init__(self, offset: int, needed: int | None = None, detail: str = ""):
        self.offset = offset
        self.needed = needed
        if needed is None:
            message = t("errors.decode.truncated", offset=offset)
        else:
            message = t("errors.decode.truncated_needed", offset=offset, needed=needed)
        if detail:
            message += f": {detail}"
        super().__init__(message)


class UnknownTagKindError(CacheError):
    """Raised for a tag byte with no known payload layout.

    Attributes:
        tag: The tag byte.
        offset: Absolute buffer offset of the tag.
    """

    def __init__(self, tag: int, offset: int):
        self.tag = tag
        self.offset = offset
        super().__init__(t("errors.decode.unknown_tag", tag=tag, offset=offset))


class InvalidUtf8Error(CacheError, ValueError):
    """Raised when a string field is not valid UTF-8.

    Attributes:
        offset: Absolute buffer offset where the string starts.
    """

    def __init__(self, offset: int, reason: object):
        self.offset = offset
        super().__init__(t("errors.decode.invalid_utf8", offset=offset, reason=reason))


class MalformedWrapperError(CacheError):
    """Raised when a package tree lacks its single synthetic wrapper key.

    Attributes:
        package_id: The record being decoded.
        keys: The top-level keys that were found.
    """

    def __init__(self, package_id: int, keys: list[str]):
        self.package_id = package_id
        self.keys = keys
        super().__init__(t("errors.records.malformed_wrapper", package_id=package_id, keys=keys))
