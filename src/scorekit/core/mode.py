"""
Mode catalog - named semitone step patterns.

The steps are from one scale pitch to the next (not cumulative) and
always return to the tonic one octave up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from scorekit.constants import SEMITONES_PER_OCTAVE


@dataclass(frozen=True)
class Mode:
    """
    A mode defined by its step pattern.

    The seven modes of the major scale, the major, natural minor and
    harmonic minor scales, and the chromatic scale. Pick CHROMATIC when a
    progression has no particular key.

    Immutable and shared by every Key that references it.
    """

    steps: tuple[int, ...]
    name: str = ""

    IONIAN: ClassVar[Mode]
    DORIAN: ClassVar[Mode]
    PHRYGIAN: ClassVar[Mode]
    LYDIAN: ClassVar[Mode]
    MIXOLYDIAN: ClassVar[Mode]
    AEOLIAN: ClassVar[Mode]
    LOCRIAN: ClassVar[Mode]
    MAJOR: ClassVar[Mode]
    NATURAL_MINOR: ClassVar[Mode]
    HARMONIC_MINOR: ClassVar[Mode]
    CHROMATIC: ClassVar[Mode]

    def __post_init__(self) -> None:
        if any(step <= 0 for step in self.steps):
            raise ValueError(f"Mode steps must be positive, got {self.steps}")
        total = sum(self.steps)
        if total != SEMITONES_PER_OCTAVE:
            raise ValueError(f"Mode steps must sum to 12 semitones, got {total}")

    @property
    def is_chromatic(self) -> bool:
        """True for the twelve-step chromatic mode."""
        return len(self.steps) == SEMITONES_PER_OCTAVE

    @property
    def degree_count(self) -> int:
        """Number of degrees (the octave is not counted)."""
        return len(self.steps)

    def offsets(self) -> list[int]:
        """Cumulative semitones from the tonic, including the octave."""
        offsets = [0]
        for step in self.steps:
            offsets.append(offsets[-1] + step)
        return offsets

    def __str__(self) -> str:
        return self.name or f"Mode({self.steps})"

    def __repr__(self) -> str:
        if self.name:
            return f"Mode.{self.name.upper().replace(' ', '_')}"
        return f"Mode({self.steps!r})"

    @classmethod
    def all(cls) -> list[Mode]:
        """Every mode in the catalog."""
        return list(_MODE_MAP.values())

    @classmethod
    def parse(cls, name: str) -> Mode:
        """
        Parse a mode from a string like 'dorian', 'natural_minor' or 'Harmonic Minor'.

        'minor' is the natural minor scale.
        """
        key = name.strip().lower().replace(" ", "_").replace("-", "_")
        if key == "minor":
            key = "natural_minor"
        if key not in _MODE_MAP:
            raise ValueError(f"Unknown mode: {name}")
        return _MODE_MAP[key]


Mode.IONIAN = Mode((2, 2, 1, 2, 2, 2, 1), "ionian")
Mode.DORIAN = Mode((2, 1, 2, 2, 2, 1, 2), "dorian")
Mode.PHRYGIAN = Mode((1, 2, 2, 2, 1, 2, 2), "phrygian")
Mode.LYDIAN = Mode((2, 2, 2, 1, 2, 2, 1), "lydian")
Mode.MIXOLYDIAN = Mode((2, 2, 1, 2, 2, 1, 2), "mixolydian")
Mode.AEOLIAN = Mode((2, 1, 2, 2, 1, 2, 2), "aeolian")
Mode.LOCRIAN = Mode((1, 2, 2, 1, 2, 2, 2), "locrian")
Mode.MAJOR = Mode((2, 2, 1, 2, 2, 2, 1), "major")
Mode.NATURAL_MINOR = Mode((2, 1, 2, 2, 1, 2, 2), "natural minor")
Mode.HARMONIC_MINOR = Mode((2, 1, 2, 2, 1, 3, 1), "harmonic minor")
Mode.CHROMATIC = Mode((1,) * 12, "chromatic")

_MODE_MAP: dict[str, Mode] = {
    "ionian": Mode.IONIAN,
    "dorian": Mode.DORIAN,
    "phrygian": Mode.PHRYGIAN,
    "lydian": Mode.LYDIAN,
    "mixolydian": Mode.MIXOLYDIAN,
    "aeolian": Mode.AEOLIAN,
    "locrian": Mode.LOCRIAN,
    "major": Mode.MAJOR,
    "natural_minor": Mode.NATURAL_MINOR,
    "harmonic_minor": Mode.HARMONIC_MINOR,
    "chromatic": Mode.CHROMATIC,
}
