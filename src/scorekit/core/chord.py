"""
Chord - an ordered stack of pitches.

Chords are built by stacking intervals on top of their last note.
The stored order is insertion order; sorting happens only for display.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from scorekit.constants import ErrorMessages
from scorekit.core.pitch import Interval, Pitch
from scorekit.core.transposable import Transposable
from scorekit.errors import ChordIndexError, InvalidArgumentError


class Chord(Transposable):
    """
    A set of simultaneous pitches, kept in insertion order.

    Order matters for indexed modification and inversion, and is not
    required to ascend. Builders mutate the chord and return it, so
    calls can be chained:

        Chord(Pitch(60)).append_major_triad()    # C4 E4 G4
        Chord(Pitch(71)).add_minor_third().add_minor_third()    # B4 D5 F5

    Every mutation is all-or-nothing: a failure leaves the chord unchanged.
    """

    __slots__ = ("_pitches",)

    def __init__(self, *pitches: Pitch) -> None:
        """Create a chord from zero or more pitches, usually a root."""
        self._pitches: list[Pitch] = list(pitches)

    @property
    def pitches(self) -> tuple[Pitch, ...]:
        """The pitches in stored order."""
        return tuple(self._pitches)

    @property
    def root(self) -> Pitch | None:
        """First stored pitch, or None for an empty chord."""
        return self._pitches[0] if self._pitches else None

    def append(self, pitch: Pitch) -> Chord:
        """Add a pitch to the end of the chord."""
        self._pitches.append(pitch)
        return self

    def append_interval(self, semitones: int | Interval) -> Chord:
        """
        Append a pitch a number of semitones away from the last one.

        Raises:
            InvalidArgumentError: If the chord is empty
            PitchRangeError: If the new pitch would leave 0-127
        """
        if not self._pitches:
            raise InvalidArgumentError(ErrorMessages.EMPTY_CHORD)
        if isinstance(semitones, Interval):
            semitones = semitones.semitones
        return self.append(self._pitches[-1].transpose(semitones))

    def add_minor_second(self) -> Chord:
        return self.append_interval(Interval.MINOR_SECOND)

    def add_major_second(self) -> Chord:
        return self.append_interval(Interval.MAJOR_SECOND)

    def add_minor_third(self) -> Chord:
        return self.append_interval(Interval.MINOR_THIRD)

    def add_major_third(self) -> Chord:
        return self.append_interval(Interval.MAJOR_THIRD)

    def add_perfect_fourth(self) -> Chord:
        return self.append_interval(Interval.PERFECT_FOURTH)

    def add_tritone(self) -> Chord:
        return self.append_interval(Interval.TRITONE)

    def add_perfect_fifth(self) -> Chord:
        return self.append_interval(Interval.PERFECT_FIFTH)

    def append_major_triad(self) -> Chord:
        """Stack a major third then a minor third on the last pitch."""
        return self._append_stack(Interval.MAJOR_THIRD, Interval.MINOR_THIRD)

    def append_minor_triad(self) -> Chord:
        """Stack a minor third then a major third on the last pitch."""
        return self._append_stack(Interval.MINOR_THIRD, Interval.MAJOR_THIRD)

    def _append_stack(self, *intervals: Interval) -> Chord:
        # Build on a scratch copy so a range failure halfway leaves us untouched
        staged = self.copy()
        for interval in intervals:
            staged.append_interval(interval)
        self._pitches = staged._pitches
        return self

    def modify_at(self, index: int, modification: Callable[[Pitch], Pitch]) -> Chord:
        """
        Replace the pitch at an index with modification(pitch).

        Raises:
            ChordIndexError: If the index is out of bounds
        """
        self._check_index(index)
        self._pitches[index] = modification(self._pitches[index])
        return self

    def invert(self, root_count: int) -> Chord:
        """
        Shift the first root_count pitches up one octave, in index order.

        invert(1) on C4 E4 G4 gives C5 E4 G4 (first inversion, the bass is now E4).
        invert(0) changes nothing; invert(len(chord)) shifts every pitch.

        Raises:
            InvalidArgumentError: If root_count is negative or larger than the chord
            PitchRangeError: If a shifted pitch would leave 0-127
        """
        if not 0 <= root_count <= len(self._pitches):
            raise InvalidArgumentError(
                ErrorMessages.INVERSION_COUNT.format(length=len(self._pitches), count=root_count)
            )
        shifted = [pitch.octave_shift(1) for pitch in self._pitches[:root_count]]
        self._pitches[:root_count] = shifted
        return self

    def transpose(self, semitones: int) -> Chord:
        """
        Transpose every pitch in place.

        Raises:
            PitchRangeError: If any pitch would leave 0-127 (nothing is changed)
        """
        self._pitches = self._transposed_pitches(semitones)
        return self

    def transposed(self, semitones: int) -> Chord:
        """A transposed copy; this chord is left alone."""
        return Chord(*self._transposed_pitches(semitones))

    def _transposed_pitches(self, semitones: int) -> list[Pitch]:
        return [pitch.transpose(semitones) for pitch in self._pitches]

    def copy(self) -> Chord:
        """A shallow copy (pitches are immutable, so this is independent)."""
        return Chord(*self._pitches)

    def sorted_pitches(self) -> list[Pitch]:
        """Pitches lowest first, for display. Stored order is untouched."""
        return sorted(self._pitches)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._pitches):
            raise ChordIndexError(
                ErrorMessages.CHORD_INDEX.format(index=index, length=len(self._pitches))
            )

    @staticmethod
    def stack(bottom: Chord, top: Chord) -> Chord:
        """
        Put one chord on top of another.

        Every pitch of top is appended to bottom in order. No sorting,
        no de-duplication.

        Returns:
            The bottom chord
        """
        for pitch in list(top._pitches):
            bottom.append(pitch)
        return bottom

    @classmethod
    def from_values(cls, values: Iterable[int]) -> Chord:
        """Build a chord from raw MIDI keys."""
        return cls(*(Pitch(value) for value in values))

    def __len__(self) -> int:
        return len(self._pitches)

    def __iter__(self) -> Iterator[Pitch]:
        return iter(list(self._pitches))

    def __getitem__(self, index: int) -> Pitch:
        return self._pitches[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chord):
            return NotImplemented
        return self._pitches == other._pitches

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Chord({', '.join(repr(p) for p in self._pitches)})"

    def __str__(self) -> str:
        return f"Chord: [{', '.join(p.name for p in self.sorted_pitches())}]"
