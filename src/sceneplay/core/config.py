"""Playback configuration with environment overrides."""

import logging
import os
from pathlib import Path
from pydantic import BaseModel

logger = logging.getLogger("ScenePlayMCP.config")

DEFAULT_STEP_DURATION_MS = 1500
DEFAULT_DECKS_DIR = "./decks"

ENV_STEP_DURATION = "SCENEPLAY_STEP_DURATION_MS"
ENV_DECKS_DIR = "SCENEPLAY_DECKS_DIR"
ENV_AUTOPLAY = "SCENEPLAY_AUTOPLAY"


class PlaybackConfig(BaseModel):
    """Session-wide defaults. Scene settings always take precedence."""
    default_step_duration_ms: int = DEFAULT_STEP_DURATION_MS
    decks_dir: Path = Path(DEFAULT_DECKS_DIR)
    autoplay_on_start: bool = False

    @classmethod
    def from_env(cls) -> "PlaybackConfig":
        config = cls()

        raw = os.getenv(ENV_STEP_DURATION)
        if raw:
            try:
                value = int(raw)
                if value <= 0:
                    raise ValueError("must be positive")
                config.default_step_duration_ms = value
            except ValueError as e:
                logger.warning(f"Ignoring {ENV_STEP_DURATION}={raw!r}: {e}")

        decks_dir = os.getenv(ENV_DECKS_DIR)
        if decks_dir:
            config.decks_dir = Path(decks_dir)

        autoplay = os.getenv(ENV_AUTOPLAY)
        if autoplay:
            config.autoplay_on_start = autoplay.strip().lower() in ("1", "true", "yes", "on")

        return config
