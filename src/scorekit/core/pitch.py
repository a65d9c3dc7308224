"""
Pitch primitives - PitchClass, Interval and Pitch.

A Pitch is one of the 128 MIDI keys. Its PitchClass is the key with the
octave folded away, and an Interval is the signed semitone gap between
two pitches. Names are spelled with sharps only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import ClassVar

from scorekit.constants import MAX_PITCH, MIN_PITCH, SEMITONES_PER_OCTAVE, ErrorMessages
from scorekit.core.transposable import Transposable
from scorekit.errors import PitchRangeError

_PITCH_PATTERN = re.compile(r"^([A-Ga-g]#?)(-?\d+)$")

# Short names for the simple intervals, indexed by semitones
_INTERVAL_NAMES = ("P1", "m2", "M2", "m3", "M3", "P4", "TT", "P5", "m6", "M6", "m7", "M7")


class PitchClass(IntEnum):
    """
    A key of the chromatic octave, 0 (C) to 11 (B).

    Member names use an 's' suffix for sharps: PitchClass.Fs is F#.
    """

    C = 0
    Cs = 1
    D = 2
    Ds = 3
    E = 4
    F = 5
    Fs = 6
    G = 7
    Gs = 8
    A = 9
    As = 10
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Move around the octave, wrapping past B back to C."""
        return PitchClass((self.value + semitones) % SEMITONES_PER_OCTAVE)

    def to_midi(self, octave: int = 4) -> int:
        """The MIDI key of this class in an octave (C4 = 60, C-1 = 0)."""
        return (octave + 1) * SEMITONES_PER_OCTAVE + self.value

    def spell(self) -> str:
        """Sharp spelling, e.g. 'F#'."""
        return self.name.replace("s", "#")

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        return cls(midi_note % SEMITONES_PER_OCTAVE)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse 'C', 'c#' or the member-style 'Cs'.

        Raises:
            ValueError: For anything else, flats included
        """
        text = name.strip()
        if text[1:] in ("#", "s", "S"):
            text = text[0] + "s"
        try:
            return cls[text[:1].upper() + text[1:]]
        except KeyError:
            raise ValueError(f"Unknown pitch class: {name}") from None


@total_ordering
@dataclass(frozen=True)
class Interval:
    """
    A signed distance in semitones.

    Chords grow by stacking intervals onto their last pitch, so the
    named constants cover the steps the chord builders use.
    """

    semitones: int

    UNISON: ClassVar[Interval]
    MINOR_SECOND: ClassVar[Interval]
    MAJOR_SECOND: ClassVar[Interval]
    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    PERFECT_FOURTH: ClassVar[Interval]
    TRITONE: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]

    @classmethod
    def between(cls, low: Pitch, high: Pitch) -> Interval:
        """The interval that takes low to high (negative if high is lower)."""
        return cls(high.value - low.value)

    @property
    def is_compound(self) -> bool:
        """True when the interval spans more than an octave."""
        return abs(self.semitones) > SEMITONES_PER_OCTAVE

    def __add__(self, other: Interval) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval(self.semitones + other.semitones)

    def __neg__(self) -> Interval:
        return Interval(-self.semitones)

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.semitones < other.semitones

    def __str__(self) -> str:
        """Short name for the interval ('m3', 'P5', 'P8'); larger spans show octaves."""
        if self.semitones == SEMITONES_PER_OCTAVE:
            return "P8"
        sign = "-" if self.semitones < 0 else ""
        octaves, rest = divmod(abs(self.semitones), SEMITONES_PER_OCTAVE)
        name = _INTERVAL_NAMES[rest]
        return f"{sign}{name}+{octaves}oct" if octaves else f"{sign}{name}"


Interval.UNISON = Interval(0)
Interval.MINOR_SECOND = Interval(1)
Interval.MAJOR_SECOND = Interval(2)
Interval.MINOR_THIRD = Interval(3)
Interval.MAJOR_THIRD = Interval(4)
Interval.PERFECT_FOURTH = Interval(5)
Interval.TRITONE = Interval(6)
Interval.PERFECT_FIFTH = Interval(7)
Interval.OCTAVE = Interval(12)


@total_ordering
class Pitch(Transposable):
    """
    A single MIDI key in the range 0-127.

    A value of 69 is A4 (440 Hz), 60 is C4 (middle C).
    Pitches are values: transpose returns a new Pitch and never
    changes this one.

    Immutable and hashable.
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int) -> None:
        """Create a pitch, rejecting values outside 0-127."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Pitch value must be an int, got {type(value).__name__}")
        if not MIN_PITCH <= value <= MAX_PITCH:
            raise PitchRangeError(ErrorMessages.PITCH_OUT_OF_RANGE.format(value=value))
        object.__setattr__(self, "_value", value)

    @property
    def value(self) -> int:
        """The raw MIDI key."""
        return self._value

    @property
    def pitch_class(self) -> PitchClass:
        """Octave-independent pitch class (0 = C)."""
        return PitchClass.from_midi(self._value)

    @property
    def octave(self) -> int:
        """Octave number, from -1 to 9. Middle C is octave 4."""
        return self._value // SEMITONES_PER_OCTAVE - 1

    @property
    def name(self) -> str:
        """Sharp-spelled name with octave, e.g. 'C#4'."""
        return f"{self.pitch_class.spell()}{self.octave}"

    def transpose(self, semitones: int) -> Pitch:
        """
        Transpose by a number of semitones.

        Raises:
            PitchRangeError: If the result would leave 0-127
        """
        return Pitch(self._value + semitones)

    def interval_to(self, other: Pitch) -> Interval:
        """Signed interval from this pitch to another."""
        return Interval.between(self, other)

    def compare(self, other: Pitch) -> int:
        """Signed difference of raw values (negative if this pitch is lower)."""
        return self._value - other._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: Pitch) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"Pitch({self._value})"

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_pitch_class(cls, pitch_class: PitchClass, octave: int = 4) -> Pitch:
        """Build a pitch from a pitch class and an octave."""
        return cls(pitch_class.to_midi(octave))

    @classmethod
    def parse(cls, name: str) -> Pitch:
        """
        Parse a pitch from a string like 'C4', 'F#3' or 'A-1'.

        Args:
            name: Pitch class name followed by an octave number

        Returns:
            Parsed Pitch

        Raises:
            ValueError: If the name is not a pitch
            PitchRangeError: If the pitch is outside 0-127
        """
        match = _PITCH_PATTERN.match(name.strip())
        if not match:
            raise ValueError(f"Invalid pitch: {name}. Expected a name like 'C4' or 'F#3'")
        pitch_class = PitchClass.parse(match.group(1))
        return cls.from_pitch_class(pitch_class, int(match.group(2)))
