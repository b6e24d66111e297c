# steamcache/core/cache_constants.py

"""Constants for Steam's binary appinfo.vdf and packageinfo.vdf caches.

Both caches share one header layout and one tagged key/value encoding;
they differ in their magic signature, record framing and end-of-records
sentinel. Everything that varies between the two is collected in a
``CacheFormat`` description so the reader can stay generic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

__all__ = [
    "APPINFO_FORMAT",
    "APP_PREAMBLE_SIZE",
    "CHECKSUM_SIZE",
    "CacheFormat",
    "CacheKind",
    "FORMAT_VERSION",
    "MajorVersion",
    "PACKAGEINFO_FORMAT",
    "TYPE_END",
    "TYPE_MAP",
    "TYPE_STRING",
    "TYPE_UINT32",
    "TYPE_UINT64",
    "VALID_MAJOR_VERSIONS",
    "VALID_MINOR_VERSIONS",
    "package_preamble_size",
]


# ===== VERSION DEFINITIONS =====


class MajorVersion(IntEnum):
    """Leading version byte of a cache file.

    Older client documentation only mentions 0x24 and 0x26; 0x27 and 0x28
    were observed on later clients.
    """

    V24 = 0x24
    V26 = 0x26
    V27 = 0x27
    V28 = 0x28


VALID_MAJOR_VERSIONS: frozenset[int] = frozenset(int(v) for v in MajorVersion)
"""Accepted values of the first header byte."""

VALID_MINOR_VERSIONS: frozenset[int] = frozenset({0x06, 0x07})
"""Accepted values of the fourth header byte."""

FORMAT_VERSION: int = 0x01
"""Required value of the 4-byte format field that closes the header."""


# ===== BINARY KEY/VALUE TYPE MARKERS =====

TYPE_MAP: int = 0x00
TYPE_STRING: int = 0x01
TYPE_UINT32: int = 0x02
TYPE_UINT64: int = 0x07
TYPE_END: int = 0x08


# ===== RECORD LAYOUT =====

CHECKSUM_SIZE: int = 20

APP_PREAMBLE_SIZE: int = 4 + 4 + 8 + CHECKSUM_SIZE + 4
"""state, last_updated, access_token, checksum, change_number."""

_PACKAGE_TOKEN_SIZE: int = 8


def package_preamble_size(major_version: int) -> int:
    """Returns the number of bytes a package record spends before its change number.

    Args:
        major_version: The cache's leading version byte.

    Returns:
        28 on 0x28 files (checksum plus token), 20 otherwise (checksum only).
    """
    if major_version == MajorVersion.V28:
        return CHECKSUM_SIZE + _PACKAGE_TOKEN_SIZE
    return CHECKSUM_SIZE


# ===== CACHE KINDS =====


class CacheKind(Enum):
    """The two cache files the decoder understands."""

    APPINFO = "appinfo"
    PACKAGEINFO = "packageinfo"


@dataclass(frozen=True)
class CacheFormat:
    """Per-kind constants of a cache file.

    Attributes:
        kind: Which cache this describes.
        magic: Big-endian 2-byte signature following the major version.
        sentinel_id: Record id that terminates the record sequence.
        file_name: Conventional file name inside Steam's ``appcache`` folder.
    """

    kind: CacheKind
    magic: int
    sentinel_id: int
    file_name: str


APPINFO_FORMAT = CacheFormat(
    kind=CacheKind.APPINFO,
    magic=0x4456,  # "DV"
    sentinel_id=0x00000000,
    file_name="appinfo.vdf",
)

PACKAGEINFO_FORMAT = CacheFormat(
    kind=CacheKind.PACKAGEINFO,
    magic=0x5556,  # "UV"
    sentinel_id=0xFFFFFFFF,
    file_name="packageinfo.vdf",
)
