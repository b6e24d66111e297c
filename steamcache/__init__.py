"""Decoder for Steam's binary appinfo.vdf and packageinfo.vdf caches."""

from __future__ import annotations

from steamcache.core import (
    AppInfoCache,
    AppRecord,
    CacheError,
    PackageInfoCache,
    PackageRecord,
    PropertyKind,
    PropertyValue,
    decode_tree,
    load_appinfo,
    load_packageinfo,
    lookup,
    read_appinfo,
    read_packageinfo,
)
from steamcache.version import __version__

__all__: list[str] = [
    "AppInfoCache",
    "AppRecord",
    "CacheError",
    "PackageInfoCache",
    "PackageRecord",
    "PropertyKind",
    "PropertyValue",
    "__version__",
    "decode_tree",
    "load_appinfo",
    "load_packageinfo",
    "lookup",
    "read_appinfo",
    "read_packageinfo",
]
