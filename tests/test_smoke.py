"""Smoke tests – verify all modules are importable and free of syntax errors.

This is an infrastructure test (not a unit test), so it lives in the tests
root rather than under ``tests/unit/``.
"""

from __future__ import annotations

import importlib
import sys

import pytest

# ---------------------------------------------------------------------------
# Module lists
# ---------------------------------------------------------------------------

CORE_MODULES: list[str] = [
    "steamcache.core.byte_cursor",
    "steamcache.core.cache_constants",
    "steamcache.core.cache_reader",
    "steamcache.core.errors",
    "steamcache.core.logging",
    "steamcache.core.path_query",
    "steamcache.core.property_value",
    "steamcache.core.records",
    "steamcache.core.tree_decoder",
]

UTILS_MODULES: list[str] = [
    "steamcache.utils.i18n",
    "steamcache.utils.paths",
    "steamcache.utils.tree_export",
]

TOP_LEVEL_MODULES: list[str] = [
    "steamcache",
    "steamcache.config",
    "steamcache.version",
]


# ---------------------------------------------------------------------------
# Parametrized import tests
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("module_path", CORE_MODULES)
def test_import_core_modules(module_path: str) -> None:
    """Core module must be importable without errors."""
    importlib.import_module(module_path)


@pytest.mark.parametrize("module_path", UTILS_MODULES)
def test_import_utils_modules(module_path: str) -> None:
    """Utils module must be importable without errors."""
    importlib.import_module(module_path)


@pytest.mark.parametrize("module_path", TOP_LEVEL_MODULES)
def test_import_top_level_modules(module_path: str) -> None:
    """Top-level module must be importable without errors."""
    importlib.import_module(module_path)


# ---------------------------------------------------------------------------
# Circular import check
# ---------------------------------------------------------------------------


def test_no_circular_imports() -> None:
    """All modules can be imported in a fresh subprocess without cycles.

    Uses subprocess isolation to avoid corrupting module references for
    other tests in the same session.
    """
    import subprocess

    all_modules = CORE_MODULES + UTILS_MODULES + TOP_LEVEL_MODULES
    import_lines = "; ".join(f"import {m}" for m in all_modules)
    result = subprocess.run(
        [sys.executable, "-c", import_lines],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0, f"Circular import detected:\nstderr: {result.stderr}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def test_public_api_exports() -> None:
    """Every name in steamcache.__all__ resolves."""
    import steamcache

    for name in steamcache.__all__:
        assert hasattr(steamcache, name), name


def test_version_string() -> None:
    """Version follows MAJOR.MINOR.PATCH."""
    from steamcache.version import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# i18n smoke tests
# ---------------------------------------------------------------------------


def test_i18n_loads() -> None:
    """The t() function returns a real message for a known key."""
    from steamcache.utils.i18n import init_i18n, t

    init_i18n("en")
    result = t("logs.cache.trailing_bytes", count=4)
    assert isinstance(result, str)
    assert result != ""
    assert result != "[logs.cache.trailing_bytes]"
