"""
Timeline - notes placed in time, and their translation to and from MIDI.

The model view is a flat, insertion-ordered list of TimedNoteEvents.
The wire view is a tick-ordered stream of note-on/note-off messages.

Encoding emits one note-on and one note-off per note. Decoding pairs
each note-off with the OLDEST pending note-on of the same pitch (FIFO).
MIDI allows the same pitch to sound twice at once, and the pairing
order decides the reconstructed lengths; FIFO is the rule here.

One layout does not survive a round trip: a zero-length note inside a
longer note of the same pitch. Its note-off closes the longer note, so
decoding gives two notes split at that tick instead of the originals.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Iterable
from pathlib import Path

from scorekit.config import ScoreSettings
from scorekit.constants import (
    DEFAULT_VELOCITY,
    MAX_VELOCITY,
    MIN_VELOCITY,
    TICKS_PER_BEAT,
    ErrorMessages,
)
from scorekit.core.chord import Chord
from scorekit.core.pitch import Pitch
from scorekit.core.progression import ChordProgression
from scorekit.core.transposable import Transposable
from scorekit.errors import StreamError
from scorekit.timeline.events import MessageKind, NoteMessage, TimedNoteEvent
from scorekit.timeline.snapshot import NoteSnapshot, TimelineSnapshot

logger = logging.getLogger(__name__)

# Order of messages sharing a tick. Notes that end here release first, then
# zero-length notes open and close, then new notes start.
_RANK_OFF = 0
_RANK_ZERO_ON = 1
_RANK_ZERO_OFF = 2
_RANK_ON = 3


class Timeline(Transposable):
    """
    A song: notes at absolute tick positions, plus a resolution.

    Notes keep the order they were added in. Sorting by time happens
    only in views (sorted_notes, to_messages) and never reorders the
    stored list.

    Example:
        timeline = Timeline(resolution=480)
        timeline.add_chord(Chord(Pitch(60)).append_major_triad(), 0, 480, 100)
        timeline.write("c_major.mid")
    """

    def __init__(
        self,
        resolution: int = TICKS_PER_BEAT,
        default_velocity: int = DEFAULT_VELOCITY,
    ) -> None:
        """
        Create an empty timeline.

        Args:
            resolution: Ticks per quarter note (default 480)
            default_velocity: Velocity used when an add_* call omits one
        """
        if resolution <= 0:
            raise ValueError(ErrorMessages.RESOLUTION.format(resolution=resolution))
        if not MIN_VELOCITY <= default_velocity <= MAX_VELOCITY:
            raise ValueError(f"Default velocity must be 1-127, got {default_velocity}")
        self._resolution = resolution
        self._default_velocity = default_velocity
        self._notes: list[TimedNoteEvent] = []

    @classmethod
    def from_settings(cls, settings: ScoreSettings) -> Timeline:
        """Create an empty timeline at the configured resolution and velocity."""
        return cls(resolution=settings.resolution, default_velocity=settings.default_velocity)

    @property
    def resolution(self) -> int:
        """Ticks per quarter note."""
        return self._resolution

    @property
    def default_velocity(self) -> int:
        return self._default_velocity

    @property
    def notes(self) -> tuple[TimedNoteEvent, ...]:
        """All notes in insertion order."""
        return tuple(self._notes)

    @property
    def end_tick(self) -> int:
        """Tick where the last note ends (0 when empty)."""
        return max((note.end_tick for note in self._notes), default=0)

    # ------------------------------------------------------------------
    # Adding and editing notes
    # ------------------------------------------------------------------

    def add_note(self, note: TimedNoteEvent) -> Timeline:
        """Add a note."""
        self._notes.append(note)
        return self

    def add_pitch(
        self,
        pitch: Pitch,
        start_tick: int,
        length: int,
        velocity: int | None = None,
    ) -> Timeline:
        """Add a pitch lasting length ticks from start_tick."""
        velocity = self._velocity(velocity)
        return self.add_note(TimedNoteEvent.from_length(pitch, start_tick, length, velocity))

    def add_chord(
        self,
        chord: Chord,
        start_tick: int,
        length: int,
        velocity: int | None = None,
    ) -> Timeline:
        """
        Add every pitch of a chord, all starting together.

        All notes share start, length and velocity; there is no arpeggiation.
        The chord is validated as a whole, so a bad argument adds nothing.
        """
        velocity = self._velocity(velocity)
        staged = [TimedNoteEvent.from_length(p, start_tick, length, velocity) for p in chord]
        self._notes.extend(staged)
        return self

    def add_chord_progression(
        self,
        progression: ChordProgression,
        start_tick: int,
        length_per_chord: int,
        velocity: int | None = None,
    ) -> Timeline:
        """
        Add every chord of a progression.

        Chord i starts at start_tick * (i + 1): chord 0 at start_tick,
        chord 1 at 2 * start_tick, and so on. Each chord lasts
        length_per_chord ticks.
        """
        velocity = self._velocity(velocity)
        staged: list[TimedNoteEvent] = []
        for i, chord in enumerate(progression):
            chord_start = start_tick * (i + 1)
            staged.extend(
                TimedNoteEvent.from_length(p, chord_start, length_per_chord, velocity)
                for p in chord
            )
        self._notes.extend(staged)
        return self

    def remove_note(self, index: int) -> TimedNoteEvent:
        """Remove and return the note at an insertion index."""
        self._check_index(index)
        return self._notes.pop(index)

    def replace_note(self, index: int, note: TimedNoteEvent) -> Timeline:
        """Replace the note at an insertion index."""
        self._check_index(index)
        self._notes[index] = note
        return self

    def clear(self) -> None:
        """Remove every note."""
        self._notes.clear()

    def transpose(self, semitones: int) -> Timeline:
        """
        Transpose every note.

        Raises:
            PitchRangeError: If any note would leave 0-127 (nothing is changed)
        """
        self._notes = [note.with_pitch(note.pitch.transpose(semitones)) for note in self._notes]
        return self

    def sorted_notes(self) -> list[TimedNoteEvent]:
        """Notes ordered by start tick (stable), as a view."""
        return sorted(self._notes, key=lambda note: note.start_tick)

    def _velocity(self, velocity: int | None) -> int:
        return self._default_velocity if velocity is None else velocity

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._notes):
            raise IndexError(
                f"Index {index} out of range for timeline of {len(self._notes)} notes."
            )

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_messages(self) -> list[NoteMessage]:
        """
        Encode the notes as tick-ordered note-on/note-off messages.

        Both messages of a note carry its pitch and velocity. Messages at
        the same tick are ordered: note-offs, then zero-length notes, then
        note-ons, so back-to-back notes of one pitch decode back to the
        same notes.
        A zero-length note nested in a longer note of its pitch is the
        exception; see the module docstring.
        """
        ranked: list[tuple[int, int, NoteMessage]] = []
        for note in self._notes:
            key = note.pitch.value
            if note.length == 0:
                on_rank, off_rank = _RANK_ZERO_ON, _RANK_ZERO_OFF
            else:
                on_rank, off_rank = _RANK_ON, _RANK_OFF
            on = NoteMessage.on(key, note.start_tick, note.velocity)
            off = NoteMessage.off(key, note.end_tick, note.velocity)
            ranked.append((note.start_tick, on_rank, on))
            ranked.append((note.end_tick, off_rank, off))

        # Stable sort keeps insertion order within a (tick, rank) group
        ranked.sort(key=lambda item: (item[0], item[1]))
        return [message for _, _, message in ranked]

    @classmethod
    def from_messages(
        cls,
        messages: Iterable[NoteMessage],
        resolution: int = TICKS_PER_BEAT,
    ) -> Timeline:
        """
        Decode a tick-ordered message stream into a timeline.

        Each note-off closes the oldest pending note-on of its pitch.
        Notes are added in the order they close.

        Raises:
            StreamError: On a note-off with no pending note-on, a note-on that
                is never closed, or ticks that go backwards
        """
        timeline = cls(resolution=resolution)
        pending: defaultdict[int, deque[NoteMessage]] = defaultdict(deque)
        previous_tick = 0

        for message in messages:
            if message.tick < previous_tick:
                raise _stream_error(
                    ErrorMessages.TICK_ORDER.format(tick=message.tick, previous=previous_tick)
                )
            previous_tick = message.tick

            if message.kind is MessageKind.ON:
                pending[message.pitch].append(message)
                continue

            queue = pending.get(message.pitch)
            if not queue:
                raise _stream_error(
                    ErrorMessages.UNMATCHED_NOTE_OFF.format(
                        pitch=Pitch(message.pitch).name, tick=message.tick
                    )
                )
            start = queue.popleft()
            timeline.add_note(
                TimedNoteEvent(Pitch(message.pitch), start.tick, message.tick, start.velocity)
            )

        unterminated = [message for queue in pending.values() for message in queue]
        if unterminated:
            first = min(unterminated, key=lambda message: message.tick)
            detail = ErrorMessages.UNTERMINATED_NOTE.format(
                pitch=Pitch(first.pitch).name, tick=first.tick
            )
            raise _stream_error(f"{detail} ({len(unterminated)} unterminated in total)")

        logger.debug(f"Decoded {len(timeline)} notes at resolution {resolution}")
        return timeline

    def write(self, path: str | Path, settings: ScoreSettings | None = None) -> None:
        """
        Write the timeline to a MIDI file.

        The timeline's own resolution is used; settings supply the
        channel and file type.

        Raises:
            OSError: If the file cannot be written
        """
        from scorekit.codec.midi import write_event_stream

        settings = settings or ScoreSettings()
        write_event_stream(
            path,
            self._resolution,
            self.to_messages(),
            channel=settings.channel,
            midi_type=settings.midi_type,
        )

    @classmethod
    def read(cls, path: str | Path) -> Timeline:
        """
        Read a MIDI file into a timeline.

        Raises:
            OSError: If the file cannot be opened
            MidiFormatError: If the file is not valid MIDI
            StreamError: If the note messages do not pair up
        """
        from scorekit.codec.midi import read_event_stream

        stream = read_event_stream(path)
        return cls.from_messages(stream.messages, resolution=stream.resolution)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_snapshot(self) -> TimelineSnapshot:
        """Dump to a snapshot (insertion order kept)."""
        return TimelineSnapshot(
            resolution=self._resolution,
            notes=[
                NoteSnapshot(
                    pitch=note.pitch.value,
                    name=note.pitch.name,
                    start_tick=note.start_tick,
                    end_tick=note.end_tick,
                    velocity=note.velocity,
                )
                for note in self._notes
            ],
        )

    @classmethod
    def from_snapshot(cls, snapshot: TimelineSnapshot) -> Timeline:
        """Rebuild a timeline from a snapshot."""
        timeline = cls(resolution=snapshot.resolution)
        for note in snapshot.notes:
            timeline.add_note(
                TimedNoteEvent(Pitch(note.pitch), note.start_tick, note.end_tick, note.velocity)
            )
        return timeline

    def __len__(self) -> int:
        return len(self._notes)

    def __repr__(self) -> str:
        return f"Timeline(resolution={self._resolution}, notes={len(self._notes)})"

    def __str__(self) -> str:
        return f"Song: [{', '.join(str(note) for note in self.sorted_notes())}]"


def _stream_error(message: str) -> StreamError:
    logger.warning(message)
    return StreamError(message)
