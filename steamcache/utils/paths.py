"""Path resolution for bundled package resources.

The message catalog ships inside the package, so the lookup works the
same from a source checkout and from an installed wheel.
"""

from __future__ import annotations

import sys
from pathlib import Path

__all__ = ["get_resources_dir"]

_resources_dir: Path | None = None


def get_resources_dir() -> Path:
    """Get the path to the resources directory.

    Checks, in order:
    1. steamcache/resources/ next to this package (source tree and pip install)
    2. sys.prefix/share/steamcache/resources (data-files installs)

    Returns:
        Path to the resources directory.

    Raises:
        FileNotFoundError: If the resources directory cannot be found.
    """
    global _resources_dir
    if _resources_dir is not None:
        return _resources_dir

    # paths.py is at steamcache/utils/paths.py → parent.parent = steamcache/
    candidates = [
        Path(__file__).resolve().parent.parent / "resources",
        Path(sys.prefix) / "share" / "steamcache" / "resources",
    ]
    for candidate in candidates:
        if candidate.is_dir():
            _resources_dir = candidate
            return _resources_dir

    raise FileNotFoundError(
        "Could not locate resources directory. Searched: " + ", ".join(str(c) for c in candidates)
    )
