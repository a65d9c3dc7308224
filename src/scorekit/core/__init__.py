"""
Core music primitives - the theory model.

- PitchClass: The 12 chromatic pitch classes (0-11)
- Interval: Distance between pitches in semitones
- Pitch: A concrete MIDI key (0-127)
- Mode: Named semitone step patterns
- Chord: Ordered stack of pitches
- ChordProgression: Chords bound to a key
- Key / Scale: Tonic + mode, and the pitches and triads derived from them
- Transposable: The shared transpose/octave-shift capability
"""

from scorekit.core.chord import Chord
from scorekit.core.mode import Mode
from scorekit.core.pitch import Interval, Pitch, PitchClass
from scorekit.core.progression import ChordProgression
from scorekit.core.scale import Key, Scale
from scorekit.core.transposable import Transposable

__all__ = [
    # Pitch
    "PitchClass",
    "Interval",
    "Pitch",
    "Transposable",
    # Scale
    "Mode",
    "Key",
    "Scale",
    # Chord
    "Chord",
    "ChordProgression",
]
