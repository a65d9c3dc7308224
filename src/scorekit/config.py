"""
Settings for building and writing timelines.

Settings can come from code or from a YAML file:

    resolution: 960
    default_velocity: 90
    channel: 0
    midi_type: 1
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from scorekit.constants import (
    DEFAULT_VELOCITY,
    MAX_CHANNEL,
    MAX_VELOCITY,
    MIN_VELOCITY,
    TICKS_PER_BEAT,
)

logger = logging.getLogger(__name__)


class ScoreSettings(BaseModel):
    """Defaults shared by Timeline construction and MIDI export."""

    resolution: int = Field(TICKS_PER_BEAT, gt=0, description="Ticks per quarter note")
    default_velocity: int = Field(
        DEFAULT_VELOCITY,
        ge=MIN_VELOCITY,
        le=MAX_VELOCITY,
        description="Velocity used when none is given",
    )
    channel: int = Field(0, ge=0, le=MAX_CHANNEL, description="MIDI channel for export")
    midi_type: int = Field(1, ge=0, le=1, description="MIDI file type for export")

    model_config = {"frozen": True, "extra": "forbid"}


def load_settings(path: str | Path) -> ScoreSettings:
    """
    Load settings from a YAML file.

    Missing keys fall back to defaults; an empty file gives all defaults.

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If a value is out of range or unknown
    """
    path = Path(path)
    with path.open() as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    settings = ScoreSettings.model_validate(data)
    logger.debug(f"Loaded settings from {path}: {settings}")
    return settings
