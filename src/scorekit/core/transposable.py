"""
The shared transpose/octave-shift capability.

Pitch, Chord, Key and ChordProgression all move by semitones.
An octave shift is always twelve semitones per octave.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from scorekit.constants import SEMITONES_PER_OCTAVE


class Transposable(ABC):
    """
    Something that can be moved up or down by semitones.

    Holds no state of its own. Implementations decide whether transpose
    returns a new value (Pitch) or mutates and returns self (containers).
    """

    __slots__ = ()

    @abstractmethod
    def transpose(self, semitones: int) -> Any:
        """Move by a number of semitones (positive or negative)."""

    def octave_shift(self, octaves: int) -> Any:
        """Move by whole octaves."""
        return self.transpose(SEMITONES_PER_OCTAVE * octaves)
