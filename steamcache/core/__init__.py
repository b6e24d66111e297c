from __future__ import annotations

from steamcache.core.byte_cursor import ByteCursor
from steamcache.core.cache_reader import (
    AppInfoCache,
    CacheHeader,
    PackageInfoCache,
    load_appinfo,
    load_packageinfo,
    read_appinfo,
    read_packageinfo,
)
from steamcache.core.errors import (
    BadFormatVersionError,
    BadMagicError,
    CacheError,
    CacheIOError,
    InvalidUtf8Error,
    MalformedWrapperError,
    TruncatedError,
    UnknownTagKindError,
    UnsupportedVersionError,
)
from steamcache.core.path_query import (
    format_entry,
    lookup,
    lookup_map,
    lookup_string,
    lookup_u32,
    lookup_u64,
)
from steamcache.core.property_value import PropertyKind, PropertyValue
from steamcache.core.records import AppRecord, PackageRecord
from steamcache.core.tree_decoder import TreeDecoder, decode_tree

__all__: list[str] = [
    "AppInfoCache",
    "AppRecord",
    "BadFormatVersionError",
    "BadMagicError",
    "ByteCursor",
    "CacheError",
    "CacheHeader",
    "CacheIOError",
    "InvalidUtf8Error",
    "MalformedWrapperError",
    "PackageInfoCache",
    "PackageRecord",
    "PropertyKind",
    "PropertyValue",
    "TreeDecoder",
    "TruncatedError",
    "UnknownTagKindError",
    "UnsupportedVersionError",
    "decode_tree",
    "format_entry",
    "load_appinfo",
    "load_packageinfo",
    "lookup",
    "lookup_map",
    "lookup_string",
    "lookup_u32",
    "lookup_u64",
    "read_appinfo",
    "read_packageinfo",
]
