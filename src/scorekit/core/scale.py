"""
Scale primitives - Scale and Key.

A key is a mode applied to a concrete tonic pitch. The scale (and, for
diatonic modes, its seven triads) is derived from the key and rebuilt from
scratch whenever the tonic moves.
"""

from __future__ import annotations

from scorekit.constants import DIATONIC_DEGREES, ErrorMessages
from scorekit.core.chord import Chord
from scorekit.core.mode import Mode
from scorekit.core.pitch import Pitch
from scorekit.core.progression import ChordProgression
from scorekit.core.transposable import Transposable
from scorekit.errors import InvalidArgumentError

# Triad quality by degree (1-indexed). Fixed for every mode - this
# approximates diatonic harmony and ignores the mode's own accidentals.
_MAJOR_DEGREES = frozenset({1, 4, 5})
_MINOR_DEGREES = frozenset({2, 3, 6})
_DIMINISHED_DEGREES = frozenset({7})


def _build_triad(degree: int, root: Pitch) -> Chord:
    if degree in _MAJOR_DEGREES:
        return Chord(root).append_major_triad()
    if degree in _MINOR_DEGREES:
        return Chord(root).append_minor_triad()
    if degree in _DIMINISHED_DEGREES:
        return Chord(root).add_minor_third().add_minor_third()
    raise InvalidArgumentError(f"No triad defined for degree {degree}")


class Scale:
    """
    The pitches of a key, tonic to octave.

    Holds len(mode.steps) + 1 pitches: the first is the tonic and each
    next one adds a step. For diatonic modes it also holds the seven
    triads built on each degree; chromatic scales have no chords.

    Build it through Key - a scale is never patched in place.
    """

    __slots__ = ("_chords", "_pitches")

    def __init__(self, mode: Mode, tonic: Pitch, key: Key) -> None:
        """
        Derive the scale for a mode and tonic.

        Args:
            mode: The mode supplying the steps
            tonic: First pitch of the scale
            key: The key that owns the chord progression

        Raises:
            PitchRangeError: If any scale or triad pitch would leave 0-127
        """
        self._pitches: tuple[Pitch, ...] = tuple(tonic.transpose(o) for o in mode.offsets())
        self._chords: ChordProgression | None = None
        if not mode.is_chromatic:
            chords = ChordProgression(key)
            for degree, root in enumerate(self._pitches[:DIATONIC_DEGREES], start=1):
                chords.add_chord(_build_triad(degree, root))
            self._chords = chords

    @property
    def pitches(self) -> tuple[Pitch, ...]:
        """Scale pitches from the tonic up to and including the octave."""
        return self._pitches

    @property
    def chords(self) -> ChordProgression | None:
        """
        The seven degree triads as a new progression, or None for a chromatic scale.

        The chords are copies; changing them leaves the scale alone.
        """
        if self._chords is None:
            return None
        copied = ChordProgression(self._chords.key)
        for chord in self._chords:
            copied.add_chord(chord.copy())
        return copied

    def __len__(self) -> int:
        return len(self._pitches)

    def __repr__(self) -> str:
        return f"Scale({', '.join(repr(p) for p in self._pitches)})"

    def __str__(self) -> str:
        return f"Scale: [{', '.join(p.name for p in self._pitches)}]"


class Key(Transposable):
    """
    A mode on a concrete tonic pitch.

    This is the context for building scales and degree chords.

    Examples:
        Key(Mode.MAJOR, Pitch(60)) = C4 major
        Key(Mode.NATURAL_MINOR, Pitch.parse("D3")) = D3 natural minor
    """

    __slots__ = ("_mode", "_scale", "_tonic")

    def __init__(self, mode: Mode, tonic: Pitch) -> None:
        """
        Create a key and derive its scale.

        Raises:
            PitchRangeError: If the scale or its triads would leave 0-127
        """
        self._mode = mode
        self._tonic = tonic
        self._scale = Scale(mode, tonic, self)

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def tonic(self) -> Pitch:
        return self._tonic

    @property
    def scale(self) -> Scale:
        return self._scale

    @property
    def name(self) -> str:
        """Short name like 'C4 major'."""
        return f"{self._tonic.name} {self._mode}"

    def get_chord_by_degree(self, degree: int) -> Chord:
        """
        Get the triad built on a scale degree.

        Returns a copy, so editing or transposing it never reaches this key.

        Args:
            degree: Scale degree, 1 (tonic) to 7 (leading tone / subtonic)

        Raises:
            InvalidArgumentError: If the mode is chromatic or the degree is not 1-7
        """
        triads = self._scale._chords
        if triads is None:
            raise InvalidArgumentError(ErrorMessages.CHROMATIC_DEGREE.format(degree=degree))
        count = len(triads)
        if not 1 <= degree <= count:
            raise InvalidArgumentError(
                ErrorMessages.DEGREE_RANGE.format(count=count, key=self.name, degree=degree)
            )
        return triads[degree - 1].copy()

    def transpose(self, semitones: int) -> Key:
        """
        Move the tonic and rebuild the scale from scratch.

        Raises:
            PitchRangeError: If the new scale would leave 0-127 (the key is unchanged)
        """
        tonic = self._tonic.transpose(semitones)
        scale = Scale(self._mode, tonic, self)
        self._tonic = tonic
        self._scale = scale
        return self

    def transposed(self, semitones: int) -> Key:
        """A transposed copy; this key is left alone."""
        return Key(self._mode, self._tonic.transpose(semitones))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self._mode == other._mode and self._tonic == other._tonic

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Key({self._mode!r}, {self._tonic!r})"

    def __str__(self) -> str:
        return f"Key: [mode: {self._mode}, tonic: {self._tonic.name}, {self._scale}]"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C4_major', 'D3_minor', 'F#2_dorian'.

        Args:
            name: Tonic pitch and mode with underscore separator

        Returns:
            Parsed Key object
        """
        parts = name.split("_")
        if len(parts) < 2:
            raise ValueError(f"Invalid key format: {name}. Expected 'tonic_mode' like 'C4_major'")

        tonic = Pitch.parse(parts[0])
        mode = Mode.parse("_".join(parts[1:]))
        return cls(mode, tonic)
