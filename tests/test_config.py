import logging

import pytest

from songflow.config import DEFAULT_RESOLUTION, EngineSettings, configure_logging


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SONGFLOW_DEFAULT_RESOLUTION", "960")
    monkeypatch.setenv("SONGFLOW_DEFAULT_BPM", "90.5")
    monkeypatch.setenv("SONGFLOW_LOG_LEVEL", "debug")

    settings = EngineSettings.from_env()

    assert settings.default_resolution == 960
    assert settings.default_bpm == 90.5
    assert settings.log_level == "DEBUG"


def test_invalid_env_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SONGFLOW_DEFAULT_RESOLUTION", "abc")
    monkeypatch.setenv("SONGFLOW_DEFAULT_BPM", "-3")
    monkeypatch.setenv("SONGFLOW_LOG_LEVEL", "loud")

    settings = EngineSettings.from_env()

    assert settings.default_resolution == DEFAULT_RESOLUTION
    assert settings.default_bpm == 120.0
    assert settings.log_level == "WARNING"


def test_configure_logging_sets_package_level() -> None:
    logger = configure_logging(EngineSettings(log_level="INFO"))
    assert logger.name == "songflow"
    assert logger.level == logging.INFO
    assert logger.handlers
