"""Environment-driven engine settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_RESOLUTION = 480
DEFAULT_BPM = 120.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(slots=True)
class EngineSettings:
    default_resolution: int = DEFAULT_RESOLUTION
    default_bpm: float = DEFAULT_BPM
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def from_env() -> EngineSettings:
        resolution_raw = os.getenv("SONGFLOW_DEFAULT_RESOLUTION", str(DEFAULT_RESOLUTION)).strip()
        bpm_raw = os.getenv("SONGFLOW_DEFAULT_BPM", str(DEFAULT_BPM)).strip()
        log_level = os.getenv("SONGFLOW_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        try:
            resolution = int(resolution_raw)
        except ValueError:
            resolution = DEFAULT_RESOLUTION
        try:
            bpm = float(bpm_raw)
        except ValueError:
            bpm = DEFAULT_BPM
        if logging.getLevelName(log_level) == f"Level {log_level}":
            log_level = DEFAULT_LOG_LEVEL
        return EngineSettings(
            default_resolution=resolution if resolution >= 1 else DEFAULT_RESOLUTION,
            default_bpm=bpm if bpm > 0 else DEFAULT_BPM,
            log_level=log_level,
        )


def configure_logging(settings: EngineSettings | None = None) -> logging.Logger:
    settings = settings or EngineSettings.from_env()
    logger = logging.getLogger("songflow")
    logger.setLevel(settings.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
