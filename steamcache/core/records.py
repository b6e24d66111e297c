# steamcache/core/records.py

"""Per-record framing for appinfo.vdf and packageinfo.vdf entries.

Each record starts with a small fixed preamble of metadata fields and
continues with one tagged key/value stream (see ``tree_decoder``). App
records are length-prefixed by the cache reader; package records are not,
so their decoder consumes exactly the preamble plus one tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from steamcache.core.byte_cursor import ByteCursor
from steamcache.core.cache_constants import APP_PREAMBLE_SIZE, CHECKSUM_SIZE, MajorVersion, package_preamble_size
from steamcache.core.errors import MalformedWrapperError, TruncatedError
from steamcache.core.path_query import PropertyQueryMixin
from steamcache.core.property_value import PropertyValue
from steamcache.core.tree_decoder import TreeDecoder
from steamcache.utils.i18n import t

__all__ = ["AppRecord", "PackageRecord", "decode_app_record", "decode_package_record"]

logger = logging.getLogger("steamcache.records")


@dataclass(frozen=True)
class AppRecord(PropertyQueryMixin):
    """One application entry of appinfo.vdf.

    Attributes:
        app_id: Steam app id.
        state: Info state flags.
        last_updated: Unix timestamp of the last metadata update.
        access_token: PICS access token.
        checksum: 20-byte SHA-1 of the text form of the metadata.
        change_number: PICS change number.
        tree: Root map of the decoded metadata.
    """

    app_id: int
    state: int
    last_updated: int
    access_token: int
    checksum: bytes = field(repr=False)
    change_number: int
    tree: PropertyValue = field(repr=False)

    @property
    def record_id(self) -> int:
        return self.app_id


@dataclass(frozen=True)
class PackageRecord(PropertyQueryMixin):
    """One package (license) entry of packageinfo.vdf.

    Attributes:
        package_id: Steam package id.
        change_number: PICS change number.
        tree: Root map of the decoded metadata, wrapper key removed.
        checksum: 20-byte SHA-1 from the preamble.
        token: Extra 8-byte preamble field present on 0x28 files, else None.
    """

    package_id: int
    change_number: int
    tree: PropertyValue = field(repr=False)
    checksum: bytes = field(default=b"", repr=False)
    token: int | None = None

    @property
    def record_id(self) -> int:
        return self.package_id


def decode_app_record(app_id: int, cursor: ByteCursor) -> AppRecord:
    """Decodes one app record from a cursor bounded to the record's length.

    Args:
        app_id: Id read by the cache reader.
        cursor: Cursor covering exactly the record's declared bytes.

    Returns:
        AppRecord: The decoded record.

    Raises:
        TruncatedError: If the preamble or tree runs past the record, or the
            tree closes before the record's declared length is used up.
    """
    if cursor.remaining < APP_PREAMBLE_SIZE:
        raise TruncatedError(cursor.offset, APP_PREAMBLE_SIZE)

    state = cursor.read_u32()
    last_updated = cursor.read_u32()
    access_token = cursor.read_u64()
    checksum = cursor.read_bytes(CHECKSUM_SIZE)
    change_number = cursor.read_u32()

    tree = TreeDecoder(cursor).decode()
    if not cursor.at_end:
        raise TruncatedError(
            cursor.offset,
            detail=t("errors.records.app_trailing_bytes", app_id=app_id, count=cursor.remaining),
        )

    logger.debug(t("logs.records.app_decoded", app_id=app_id, keys=len(tree)))
    return AppRecord(
        app_id=app_id,
        state=state,
        last_updated=last_updated,
        access_token=access_token,
        checksum=checksum,
        change_number=change_number,
        tree=tree,
    )


def decode_package_record(package_id: int, cursor: ByteCursor, major_version: int) -> PackageRecord:
    """Decodes one package record, leaving ``cursor`` right after it.

    Args:
        package_id: Id read by the cache reader.
        cursor: Cursor positioned at the record preamble.
        major_version: Leading version byte of the file; selects the
            preamble layout and whether the wrapper key is mandatory.

    Returns:
        PackageRecord: The decoded record.

    Raises:
        MalformedWrapperError: If a 0x28 tree does not hold exactly one
            top-level map.
    """
    checksum = cursor.read_bytes(CHECKSUM_SIZE)
    token = None
    extra = package_preamble_size(major_version) - CHECKSUM_SIZE
    if extra:
        token = int.from_bytes(cursor.read_bytes(extra), "little")
    change_number = cursor.read_u32()

    raw_tree = TreeDecoder(cursor).decode()
    tree = _strip_wrapper(package_id, raw_tree, required=major_version == MajorVersion.V28)

    logger.debug(t("logs.records.package_decoded", package_id=package_id, keys=len(tree)))
    return PackageRecord(
        package_id=package_id,
        change_number=change_number,
        tree=tree,
        checksum=checksum,
        token=token,
    )


def _strip_wrapper(package_id: int, tree: PropertyValue, required: bool) -> PropertyValue:
    """Removes the single synthetic key package trees are nested under.

    When ``required`` is False the wrapper is only removed if it is clearly
    present: one top-level map keyed by the package id.
    """
    keys = tree.keys()
    only = tree.get(keys[0]) if len(keys) == 1 else None

    if not required:
        if only is not None and only.is_map and keys[0] == str(package_id):
            return only
        return tree

    if only is None or not only.is_map:
        raise MalformedWrapperError(package_id, keys)
    if keys[0] != str(package_id):
        logger.debug(t("logs.records.wrapper_key_mismatch", package_id=package_id, key=keys[0]))
    return only
