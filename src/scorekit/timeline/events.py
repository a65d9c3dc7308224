"""
Timeline events - the two views of a note.

TimedNoteEvent is the model view: one note with a start and an end.
NoteMessage is the wire view: a single note-on or note-off at a tick.
All times are in ticks (absolute from start of track).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from scorekit.constants import MAX_PITCH, MAX_VELOCITY, MIN_PITCH, MIN_VELOCITY
from scorekit.core.pitch import Pitch


class MessageKind(str, Enum):
    """Note-on or note-off."""

    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class TimedNoteEvent:
    """
    A note placed on the timeline.

    Immutable; use the with_* helpers (or Timeline.replace_note) to change one.
    """

    pitch: Pitch
    start_tick: int
    end_tick: int
    velocity: int

    def __post_init__(self) -> None:
        """Validate tick and velocity ranges."""
        if self.start_tick < 0:
            raise ValueError(f"Start tick must be >= 0, got {self.start_tick}")
        if self.end_tick < self.start_tick:
            raise ValueError(
                f"End tick {self.end_tick} is before start tick {self.start_tick}"
            )
        if not MIN_VELOCITY <= self.velocity <= MAX_VELOCITY:
            raise ValueError(f"Velocity must be 1-127, got {self.velocity}")

    @property
    def length(self) -> int:
        """Length in ticks."""
        return self.end_tick - self.start_tick

    def with_pitch(self, pitch: Pitch) -> TimedNoteEvent:
        return replace(self, pitch=pitch)

    def with_velocity(self, velocity: int) -> TimedNoteEvent:
        return replace(self, velocity=velocity)

    def with_ticks(self, start_tick: int, end_tick: int) -> TimedNoteEvent:
        return replace(self, start_tick=start_tick, end_tick=end_tick)

    @classmethod
    def from_length(cls, pitch: Pitch, start_tick: int, length: int, velocity: int) -> TimedNoteEvent:
        """Create from a start tick and a length instead of an end tick."""
        return cls(pitch, start_tick, start_tick + length, velocity)

    def __str__(self) -> str:
        return (
            f"Note: [{self.pitch.name}, start: {self.start_tick}, "
            f"end: {self.end_tick}, velocity: {self.velocity}]"
        )


@dataclass(frozen=True)
class NoteMessage:
    """
    A single note-on or note-off at an absolute tick.

    This is the lowest-level representation before writing to MIDI.
    """

    kind: MessageKind
    pitch: int  # MIDI note number (0-127)
    tick: int  # Absolute time in ticks
    velocity: int  # 0-127

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not MIN_PITCH <= self.pitch <= MAX_PITCH:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= MAX_VELOCITY:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if self.tick < 0:
            raise ValueError(f"Tick must be >= 0, got {self.tick}")
        if self.kind is MessageKind.ON and self.velocity == 0:
            raise ValueError("Note-on velocity must be 1-127; velocity 0 is a note-off")

    @property
    def is_on(self) -> bool:
        return self.kind is MessageKind.ON

    @classmethod
    def on(cls, pitch: int, tick: int, velocity: int) -> NoteMessage:
        return cls(MessageKind.ON, pitch, tick, velocity)

    @classmethod
    def off(cls, pitch: int, tick: int, velocity: int) -> NoteMessage:
        return cls(MessageKind.OFF, pitch, tick, velocity)
