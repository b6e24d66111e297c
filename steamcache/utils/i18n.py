"""
Message catalog for log lines and error details.

Messages are looked up by dot-notation key from JSON files:
1. Shared files from resources/i18n/*.json (language-agnostic log lines)
2. Locale-specific files from resources/i18n/{locale}/*.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

__all__ = ["I18n", "get_language", "init_i18n", "t"]

logger = logging.getLogger("steamcache.i18n")


class I18n:
    """Loads and merges the message catalog for one locale.

    English is always loaded as the fallback; a different locale is merged
    on top of it, so missing translations fall back per key.
    """

    def __init__(self, locale: str = "en", i18n_root: Path | None = None) -> None:
        """Initialize the catalog.

        Args:
            locale: Locale directory name under resources/i18n/.
            i18n_root: Catalog root; defaults to the bundled resources.
        """
        self.locale = locale
        self.translations: dict[str, Any] = {}

        if i18n_root is None:
            from steamcache.utils.paths import get_resources_dir

            i18n_root = get_resources_dir() / "i18n"
        self.i18n_root = i18n_root

        self._load_translations()

    def _load_translations(self) -> None:
        shared_data = self._load_json_directory(self.i18n_root)
        en_data = self._load_json_directory(self.i18n_root / "en")
        fallback = self._deep_merge(shared_data, en_data)

        if self.locale != "en":
            target_data = self._load_json_directory(self.i18n_root / self.locale)
            self.translations = self._deep_merge(fallback, target_data)
        else:
            self.translations = fallback

    def _load_json_directory(self, directory: Path) -> dict[str, Any]:
        """Loads and deep-merges all ``*.json`` files in a directory."""
        merged: dict[str, Any] = {}
        if not directory.exists():
            return merged
        for file_path in sorted(directory.glob("*.json")):
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    merged = self._deep_merge(merged, json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.error("Error loading i18n file %s: %s", file_path.name, e)
        return merged

    def _deep_merge(self, base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()
        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def t(self, key: str, /, **kwargs: Any) -> str:
        """Retrieve a message by dot-notation key.

        Args:
            key: Dot-separated key path (e.g. 'logs.cache.loaded').
            **kwargs: Format arguments for string interpolation.

        Returns:
            The formatted message, or '[key]' if not found.
        """
        value: Any = self.translations
        for part in key.split("."):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(part)

        if not isinstance(value, str):
            return f"[{key}]"

        if kwargs:
            try:
                return value.format(**kwargs)
            except (ValueError, KeyError, IndexError):
                return value

        return value


_i18n_instance: I18n | None = None


def init_i18n(locale: str = "en") -> I18n:
    """Initialize the global catalog instance.

    Args:
        locale: The locale code to use.

    Returns:
        The initialized I18n instance.
    """
    global _i18n_instance
    _i18n_instance = I18n(locale)
    return _i18n_instance


def get_language() -> str:
    """Return the locale code of the global catalog."""
    if _i18n_instance is None:
        init_i18n()
    return _i18n_instance.locale


def t(key: str, /, **kwargs: Any) -> str:
    """Retrieve a message using the global catalog instance.

    Args:
        key: Dot-separated key path.
        **kwargs: Format arguments for string interpolation.

    Returns:
        The formatted message, or '[key]' if not found.
    """
    if _i18n_instance is None:
        init_i18n()
    return _i18n_instance.t(key, **kwargs)
