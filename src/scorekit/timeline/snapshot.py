"""
Timeline snapshots - an inspectable, diffable dump of a timeline.

Notes are kept in insertion order (the timeline's own order), so a
snapshot round-trips exactly. Schema version: timeline/v1
"""

from __future__ import annotations

import yaml
from pydantic import BaseModel, Field

from scorekit.constants import (
    MAX_PITCH,
    MAX_VELOCITY,
    MIN_PITCH,
    MIN_VELOCITY,
    SNAPSHOT_SCHEMA,
    TICKS_PER_BEAT,
    SchemaVersion,
)


class NoteSnapshot(BaseModel):
    """A single note, with its pitch name for human readers."""

    pitch: int = Field(..., ge=MIN_PITCH, le=MAX_PITCH, description="MIDI key")
    name: str = Field("", description="Pitch name like 'C#4' (informational)")
    start_tick: int = Field(..., ge=0)
    end_tick: int = Field(..., ge=0)
    velocity: int = Field(..., ge=MIN_VELOCITY, le=MAX_VELOCITY)

    model_config = {"frozen": True}


class TimelineSnapshot(BaseModel):
    """The complete timeline: resolution plus notes."""

    schema_version: SchemaVersion = Field(SNAPSHOT_SCHEMA, alias="schema")
    resolution: int = Field(TICKS_PER_BEAT, gt=0, description="Ticks per quarter note")
    notes: list[NoteSnapshot] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> TimelineSnapshot:
        """Deserialize from JSON string."""
        return cls.model_validate_json(json_str)

    def to_yaml(self) -> str:
        """Serialize to YAML string."""
        return yaml.safe_dump(
            self.model_dump(mode="json", by_alias=True),
            default_flow_style=False,
            sort_keys=False,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> TimelineSnapshot:
        """Deserialize from YAML string."""
        return cls.model_validate(yaml.safe_load(yaml_str) or {})
