"""Custom exception hierarchy for scorekit."""

from __future__ import annotations


class ScoreError(Exception):
    """Base exception for all scorekit errors."""


class PitchRangeError(ScoreError, ValueError):
    """A pitch left the 0-127 MIDI key range after a transform."""


class InvalidArgumentError(ScoreError, ValueError):
    """Bad scale degree, inversion count, or a degree request on a chromatic key."""


class ChordIndexError(ScoreError, IndexError):
    """Out-of-bounds modify-by-index on a Chord or ChordProgression."""


class StreamError(ScoreError):
    """Malformed note-on/note-off stream: unmatched note-off or unterminated note-on."""


class MidiFormatError(ScoreError):
    """The MIDI file could not be parsed."""
