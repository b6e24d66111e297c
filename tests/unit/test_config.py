"""Tests for Config and logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from steamcache.config import Config, get_config
from steamcache.core.errors import BadFormatVersionError
from steamcache.core.logging import logger as package_logger
from steamcache.core.logging import setup_logging
from steamcache.utils.i18n import get_language, init_i18n


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("STEAMCACHE_STEAM_PATH", "STEAMCACHE_LOG_LEVEL", "STEAMCACHE_LOCALE"):
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Settings file, environment and cache path helpers."""

    def test_defaults(self) -> None:
        config = Config(AUTO_DETECT=False)
        assert config.STEAM_PATH is None
        assert config.LOG_LEVEL == "INFO"
        assert config.LOCALE == "en"
        assert config.appinfo_path() is None
        assert config.packageinfo_path() is None

    def test_cache_paths(self, tmp_path: Path) -> None:
        config = Config(STEAM_PATH=tmp_path, AUTO_DETECT=False)
        assert config.appinfo_path() == tmp_path / "appcache" / "appinfo.vdf"
        assert config.packageinfo_path() == tmp_path / "appcache" / "packageinfo.vdf"

    def test_settings_file(self, tmp_path: Path) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text(
            json.dumps({"steam_path": str(tmp_path / "steam"), "log_level": "DEBUG", "locale": "de"}),
            encoding="utf-8",
        )
        config = Config(SETTINGS_FILE=settings, AUTO_DETECT=False)
        assert config.STEAM_PATH == tmp_path / "steam"
        assert config.LOG_LEVEL == "DEBUG"
        assert config.LOCALE == "de"

    def test_missing_settings_file(self, tmp_path: Path) -> None:
        config = Config(SETTINGS_FILE=tmp_path / "absent.json", AUTO_DETECT=False)
        assert config.LOG_LEVEL == "INFO"

    def test_broken_settings_file(self, tmp_path: Path) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text("{", encoding="utf-8")
        config = Config(SETTINGS_FILE=settings, AUTO_DETECT=False)
        assert config.STEAM_PATH is None

    def test_environment_overrides_settings_file(self, tmp_path: Path, monkeypatch) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"steam_path": "/from/file", "log_level": "ERROR"}), encoding="utf-8")
        monkeypatch.setenv("STEAMCACHE_STEAM_PATH", str(tmp_path))
        monkeypatch.setenv("STEAMCACHE_LOG_LEVEL", "WARNING")

        config = Config(SETTINGS_FILE=settings, AUTO_DETECT=False)
        assert config.STEAM_PATH == tmp_path
        assert config.LOG_LEVEL == "WARNING"

    def test_auto_detect_linux(self, tmp_path: Path, monkeypatch) -> None:
        steam_dir = tmp_path / ".local" / "share" / "Steam"
        steam_dir.mkdir(parents=True)
        monkeypatch.setattr("platform.system", lambda: "Linux")
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        config = Config()
        assert config.STEAM_PATH == steam_dir

    def test_explicit_path_skips_detection(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr(Config, "_find_steam_path", staticmethod(lambda: pytest.fail("detection ran")))
        config = Config(STEAM_PATH=tmp_path)
        assert config.STEAM_PATH == tmp_path


class TestSetupLogging:
    """The package logger is configured once."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        handlers = list(package_logger.handlers)
        level = package_logger.level
        package_logger.handlers.clear()
        yield
        for handler in package_logger.handlers:
            handler.close()
        package_logger.handlers[:] = handlers
        package_logger.setLevel(level)

    def test_level_name(self) -> None:
        setup_logging("debug")
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_unknown_level_name_falls_back_to_info(self) -> None:
        setup_logging("chatty")
        assert package_logger.level == logging.INFO

    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "steamcache.log"
        setup_logging(logging.WARNING, log_file=log_file)
        assert len(package_logger.handlers) == 2
        assert log_file.exists()

    def test_second_call_adds_no_handlers(self) -> None:
        setup_logging()
        setup_logging("ERROR")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.ERROR


class TestApply:
    """Config.apply wires LOG_LEVEL and LOCALE into the package."""

    @pytest.fixture(autouse=True)
    def restore_state(self):
        handlers = list(package_logger.handlers)
        level = package_logger.level
        package_logger.handlers.clear()
        yield
        for handler in package_logger.handlers:
            handler.close()
        package_logger.handlers[:] = handlers
        package_logger.setLevel(level)
        init_i18n("en")

    def test_applies_level_and_locale(self) -> None:
        init_i18n("en")
        Config(LOG_LEVEL="DEBUG", LOCALE="de", AUTO_DETECT=False).apply()

        assert package_logger.level == logging.DEBUG
        assert get_language() == "de"
        assert str(BadFormatVersionError(2)) == "Formatversion muss 1 sein, gelesen 0x2"

    def test_environment_reaches_logger(self, monkeypatch) -> None:
        monkeypatch.setenv("STEAMCACHE_LOG_LEVEL", "WARNING")
        Config(AUTO_DETECT=False).apply()
        assert package_logger.level == logging.WARNING
        assert get_language() == "en"

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "steamcache.log"
        Config(AUTO_DETECT=False).apply(log_file)
        assert log_file.exists()

    def test_shared_instance(self, monkeypatch) -> None:
        monkeypatch.setattr("steamcache.config._config", None)
        monkeypatch.setattr(Config, "_find_steam_path", staticmethod(lambda: None))
        first = get_config()
        assert get_config() is first
        assert first.STEAM_PATH is None
