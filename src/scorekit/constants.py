"""
Constants for the score model and MIDI translation.

No magic numbers - ranges and defaults live here.
"""

from typing import Literal

# 7-bit MIDI key space
MIN_PITCH = 0
MAX_PITCH = 127

# Note-on velocity 0 means note-off on the wire, so timeline notes start at 1
MIN_VELOCITY = 1
MAX_VELOCITY = 127
DEFAULT_VELOCITY = 100

MAX_CHANNEL = 15

SEMITONES_PER_OCTAVE = 12

# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480

# Degrees of a diatonic scale (the octave is not a degree)
DIATONIC_DEGREES = 7

# Snapshot schema version
SchemaVersion = Literal["timeline/v1"]
SNAPSHOT_SCHEMA: SchemaVersion = "timeline/v1"


class ErrorMessages:
    """Standardized error messages."""

    PITCH_OUT_OF_RANGE = "Pitch must be 0-127, got {value}"
    EMPTY_CHORD = "Cannot add an interval to an empty chord."
    CHORD_INDEX = "Index {index} out of range for chord of {length} notes."
    PROGRESSION_INDEX = "Index {index} out of range for progression of {length} chords."
    INVERSION_COUNT = "Inversion count must be 0-{length}, got {count}."
    CHROMATIC_DEGREE = "Cannot harmonize the chromatic scale (degree {degree})."
    DEGREE_RANGE = "There are {count} degrees in {key}, from 1 to {count}. Got {degree}."
    UNMATCHED_NOTE_OFF = "Note-off for {pitch} at tick {tick} has no pending note-on."
    UNTERMINATED_NOTE = "Note-on for {pitch} at tick {tick} was never turned off."
    TICK_ORDER = "Event at tick {tick} comes after tick {previous}; stream must be tick-ordered."
    RESOLUTION = "Resolution must be a positive number of ticks, got {resolution}."
