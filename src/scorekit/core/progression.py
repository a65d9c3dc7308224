"""
ChordProgression - an ordered run of chords bound to a key.

If a progression has no particular key, give it a key in Mode.CHROMATIC.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from scorekit.constants import ErrorMessages
from scorekit.core.chord import Chord
from scorekit.core.pitch import Pitch
from scorekit.core.transposable import Transposable
from scorekit.errors import ChordIndexError

if TYPE_CHECKING:
    from scorekit.core.scale import Key


class ChordProgression(Transposable):
    """
    Chords in playing order plus the key they belong to.

    Builders append and return the progression for chaining:

        ChordProgression(key).add_chord_by_degree(1).add_chord_by_degree(4)

    Transposing moves the key and every chord together. Either everything
    moves or, on a range failure, nothing does.
    """

    __slots__ = ("_chords", "_key")

    def __init__(self, key: Key) -> None:
        self._key = key
        self._chords: list[Chord] = []

    @property
    def key(self) -> Key:
        """The key this progression is in."""
        return self._key

    @property
    def chords(self) -> tuple[Chord, ...]:
        """The chords in playing order."""
        return tuple(self._chords)

    def add_chord(self, chord: Chord) -> ChordProgression:
        """Append a chord (stored by reference)."""
        self._chords.append(chord)
        return self

    def add_major_chord(self, root: Pitch) -> ChordProgression:
        """Append a major triad on root."""
        return self.add_chord(Chord(root).append_major_triad())

    def add_minor_chord(self, root: Pitch) -> ChordProgression:
        """Append a minor triad on root."""
        return self.add_chord(Chord(root).append_minor_triad())

    def add_chord_by_degree(self, degree: int) -> ChordProgression:
        """
        Append the key's triad on a scale degree.

        Raises:
            InvalidArgumentError: If the key is chromatic or the degree is not 1-7
        """
        return self.add_chord(self._key.get_chord_by_degree(degree))

    def modify_at(self, index: int, modification: Callable[[Chord], Chord]) -> ChordProgression:
        """
        Replace the chord at an index with modification(chord).

        Raises:
            ChordIndexError: If the index is out of bounds
        """
        if not 0 <= index < len(self._chords):
            raise ChordIndexError(
                ErrorMessages.PROGRESSION_INDEX.format(index=index, length=len(self._chords))
            )
        self._chords[index] = modification(self._chords[index])
        return self

    def transpose(self, semitones: int) -> ChordProgression:
        """
        Transpose the key and every chord by the same amount.

        All new pitches are computed before anything is committed.
        The key and the chords are replaced with transposed copies, so a
        Key or Chord shared with the caller is not changed.

        Raises:
            PitchRangeError: If the key or any chord would leave 0-127
        """
        staged_key = self._key.transposed(semitones)
        staged = [chord.transposed(semitones) for chord in self._chords]

        self._key = staged_key
        self._chords = staged
        return self

    def __len__(self) -> int:
        return len(self._chords)

    def __iter__(self) -> Iterator[Chord]:
        return iter(list(self._chords))

    def __getitem__(self, index: int) -> Chord:
        return self._chords[index]

    def __repr__(self) -> str:
        return f"ChordProgression({self._key!r}, chords={len(self._chords)})"

    def __str__(self) -> str:
        parts = [f"Key: {self._key.name}"] + [str(chord) for chord in self._chords]
        return f"Chord progression: [{', '.join(parts)}]"
