# tests/conftest.py
import struct
from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest

APPINFO_MAGIC = 0x4456
PACKAGEINFO_MAGIC = 0x5556
APPINFO_SENTINEL = 0x00000000
PACKAGEINFO_SENTINEL = 0xFFFFFFFF


def _cstr(text: str) -> bytes:
    return text.encode("utf-8") + b"\x00"


class StreamBuilder:
    """Writes the tagged key/value stream found inside cache records."""

    def __init__(self) -> None:
        self._buf = BytesIO()

    def begin(self, key: str) -> "StreamBuilder":
        self._buf.write(b"\x00" + _cstr(key))
        return self

    def end(self) -> "StreamBuilder":
        self._buf.write(b"\x08")
        return self

    def string(self, key: str, value: str) -> "StreamBuilder":
        self._buf.write(b"\x01" + _cstr(key) + _cstr(value))
        return self

    def u32(self, key: str, value: int) -> "StreamBuilder":
        self._buf.write(b"\x02" + _cstr(key) + struct.pack("<I", value))
        return self

    def u64(self, key: str, value: int) -> "StreamBuilder":
        self._buf.write(b"\x07" + _cstr(key) + struct.pack("<Q", value))
        return self

    def raw(self, data: bytes) -> "StreamBuilder":
        self._buf.write(data)
        return self

    def getvalue(self) -> bytes:
        return self._buf.getvalue()

    def close_root(self) -> bytes:
        """Appends the root-closing end tag and returns the stream."""
        return self.end().getvalue()


def build_header(magic: int, major: int = 0x27, minor: int = 0x06, format_version: int = 1) -> bytes:
    return bytes([major]) + struct.pack(">H", magic) + bytes([minor]) + struct.pack("<I", format_version)


def build_app_record(
    app_id: int,
    tree: bytes,
    state: int = 0,
    last_updated: int = 0,
    access_token: int = 0,
    checksum: bytes = b"\x00" * 20,
    change_number: int = 0,
) -> bytes:
    body = (
        struct.pack("<IIQ", state, last_updated, access_token)
        + checksum
        + struct.pack("<I", change_number)
        + tree
    )
    return struct.pack("<II", app_id, len(body)) + body


def build_package_record(
    package_id: int,
    tree: bytes,
    preamble_size: int = 20,
    change_number: int = 0,
) -> bytes:
    preamble = bytes(range(preamble_size))
    return struct.pack("<I", package_id) + preamble + struct.pack("<I", change_number) + tree


def wrapped_package_tree(package_id: int, build: Callable[[StreamBuilder], StreamBuilder]) -> bytes:
    """Package stream with its content nested under the package id key."""
    stream = StreamBuilder().begin(str(package_id))
    build(stream)
    return stream.end().close_root()


@pytest.fixture
def stream() -> StreamBuilder:
    """Fresh tagged-stream builder."""
    return StreamBuilder()


@pytest.fixture
def sample_tree_bytes() -> bytes:
    """Encodes { "a": UInt32(7), "b": { "c": String("x") } }."""
    return StreamBuilder().u32("a", 7).begin("b").string("c", "x").end().close_root()


@pytest.fixture
def make_appinfo() -> Callable[..., bytes]:
    """Builds a complete appinfo.vdf buffer from encoded records."""

    def _make(records: list[bytes], major: int = 0x27, minor: int = 0x06) -> bytes:
        return build_header(APPINFO_MAGIC, major, minor) + b"".join(records) + struct.pack("<I", APPINFO_SENTINEL)

    return _make


@pytest.fixture
def make_packageinfo() -> Callable[..., bytes]:
    """Builds a complete packageinfo.vdf buffer from encoded records."""

    def _make(records: list[bytes], major: int = 0x27, minor: int = 0x06) -> bytes:
        return (
            build_header(PACKAGEINFO_MAGIC, major, minor)
            + b"".join(records)
            + struct.pack("<I", PACKAGEINFO_SENTINEL)
        )

    return _make


@pytest.fixture
def app_record() -> Callable[..., bytes]:
    """Factory for a length-prefixed appinfo record."""
    return build_app_record


@pytest.fixture
def package_record() -> Callable[..., bytes]:
    """Factory for a packageinfo record."""
    return build_package_record


@pytest.fixture
def package_tree() -> Callable[..., bytes]:
    """Factory for a package stream wrapped under its id key."""
    return wrapped_package_tree


@pytest.fixture
def cache_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Writes bytes to a file under tmp_path and returns its path."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
