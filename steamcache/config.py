"""
Configuration - Steam directory detection and logging/locale settings.

The decoder itself never reads configuration: cache paths are always passed
to ``read_appinfo``/``read_packageinfo`` explicitly. This module only helps
callers find those paths, and ``Config.apply`` sets the package log level
and message locale (``get_config().apply()`` at application start).

Sources, lowest priority first: dataclass defaults, an optional JSON
settings file, environment variables (a ``.env`` file is honored), and
finally platform auto-detection of the Steam directory.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from steamcache.core.cache_constants import APPINFO_FORMAT, PACKAGEINFO_FORMAT
from steamcache.core.logging import setup_logging
from steamcache.utils.i18n import get_language, init_i18n, t

logger = logging.getLogger("steamcache.config")

__all__ = ["Config", "get_config"]

ENV_PREFIX = "STEAMCACHE_"


@dataclass
class Config:
    """
    Settings for locating Steam's caches and for the package's logging.
    """

    STEAM_PATH: Path | None = None
    SETTINGS_FILE: Path | None = None

    LOG_LEVEL: str = "INFO"
    LOCALE: str = "en"

    AUTO_DETECT: bool = True

    def __post_init__(self):
        """Apply settings file, environment and auto-detection."""
        if self.SETTINGS_FILE is not None:
            self._load_settings(self.SETTINGS_FILE)

        load_dotenv()
        self._load_environment()

        if not self.STEAM_PATH and self.AUTO_DETECT:
            detected = self._find_steam_path()
            if detected:
                logger.debug(t("logs.config.steam_detected", path=str(detected)))
                self.STEAM_PATH = detected

    def _load_settings(self, settings_file: Path) -> None:
        """Load settings from a JSON file; a missing file is not an error."""
        if not settings_file.exists():
            return

        try:
            with open(settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(t("logs.config.load_error", path=str(settings_file), error=e))
            return

        steam_path = data.get("steam_path")
        if steam_path:
            self.STEAM_PATH = Path(steam_path)
        self.LOG_LEVEL = data.get("log_level", self.LOG_LEVEL)
        self.LOCALE = data.get("locale", self.LOCALE)

    def _load_environment(self) -> None:
        steam_path = os.getenv(ENV_PREFIX + "STEAM_PATH")
        if steam_path:
            self.STEAM_PATH = Path(steam_path)
        self.LOG_LEVEL = os.getenv(ENV_PREFIX + "LOG_LEVEL", self.LOG_LEVEL)
        self.LOCALE = os.getenv(ENV_PREFIX + "LOCALE", self.LOCALE)

    @staticmethod
    def _find_steam_path() -> Path | None:
        """Auto-detect the Steam directory on Linux, macOS and Windows."""
        system = platform.system()

        if system == "Windows":
            try:
                import winreg

                key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Software\Valve\Steam")
                path_str, _ = winreg.QueryValueEx(key, "SteamPath")
                path = Path(path_str)
                if path.exists():
                    return path
            except OSError as e:
                logger.debug(t("logs.config.registry_failed", error=e))
            paths = [Path(r"C:\Program Files (x86)\Steam"), Path(r"C:\Program Files\Steam")]
        elif system == "Darwin":
            paths = [Path.home() / "Library" / "Application Support" / "Steam"]
        else:
            paths = [
                Path.home() / ".steam" / "steam",
                Path.home() / ".local" / "share" / "Steam",
            ]

        for p in paths:
            if p.exists():
                return p.resolve() if p.is_symlink() else p
        return None

    def apply(self, log_file: Path | None = None) -> None:
        """Apply LOG_LEVEL to the package logger and switch the message locale.

        Args:
            log_file: Optional log file passed on to ``setup_logging``.
        """
        setup_logging(self.LOG_LEVEL, log_file)
        if get_language() != self.LOCALE:
            init_i18n(self.LOCALE)

    # ===== CACHE LOCATIONS =====

    def appinfo_path(self) -> Path | None:
        """Default location of appinfo.vdf, or None without a Steam path."""
        if not self.STEAM_PATH:
            return None
        return self.STEAM_PATH / "appcache" / APPINFO_FORMAT.file_name

    def packageinfo_path(self) -> Path | None:
        """Default location of packageinfo.vdf, or None without a Steam path."""
        if not self.STEAM_PATH:
            return None
        return self.STEAM_PATH / "appcache" / PACKAGEINFO_FORMAT.file_name


_config: Config | None = None


def get_config() -> Config:
    """Return the shared Config instance, creating it on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config
