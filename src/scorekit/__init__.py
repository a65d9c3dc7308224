"""
scorekit - tonal music theory and MIDI note timelines.

Notes, chords, scales, keys and modes, plus the translation between a
flat list of timed notes and a MIDI note-on/note-off stream.
"""

from scorekit.config import ScoreSettings, load_settings
from scorekit.core import (
    Chord,
    ChordProgression,
    Interval,
    Key,
    Mode,
    Pitch,
    PitchClass,
    Scale,
    Transposable,
)
from scorekit.errors import (
    ChordIndexError,
    InvalidArgumentError,
    MidiFormatError,
    PitchRangeError,
    ScoreError,
    StreamError,
)
from scorekit.timeline import MessageKind, NoteMessage, TimedNoteEvent, Timeline

__version__ = "0.1.0"

__all__ = [
    # Theory
    "Chord",
    "ChordProgression",
    "Interval",
    "Key",
    "Mode",
    "Pitch",
    "PitchClass",
    "Scale",
    "Transposable",
    # Timeline
    "MessageKind",
    "NoteMessage",
    "TimedNoteEvent",
    "Timeline",
    # Config
    "ScoreSettings",
    "load_settings",
    # Errors
    "ChordIndexError",
    "InvalidArgumentError",
    "MidiFormatError",
    "PitchRangeError",
    "ScoreError",
    "StreamError",
]
