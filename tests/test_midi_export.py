"""
MIDI codec tests - writing and reading real files through mido.
"""

from pathlib import Path

import pytest
from mido import Message, MetaMessage, MidiFile, MidiTrack

from scorekit.codec.midi import (
    EventStream,
    messages_to_midi,
    midi_to_event_stream,
    read_event_stream,
    write_event_stream,
)
from scorekit.config import ScoreSettings
from scorekit.constants import TICKS_PER_BEAT
from scorekit.core import ChordProgression, Key, Mode, Pitch
from scorekit.errors import MidiFormatError
from scorekit.timeline import MessageKind, NoteMessage, TimedNoteEvent, Timeline


def canonical(notes) -> list[tuple[int, int, int, int]]:
    return sorted((n.start_tick, n.pitch.value, n.end_tick, n.velocity) for n in notes)


class TestMessagesToMidi:
    """Test the messages_to_midi function."""

    def test_empty_messages(self) -> None:
        """Can create MIDI file with no notes."""
        mid = messages_to_midi([])
        assert len(mid.tracks) == 1
        assert mid.ticks_per_beat == TICKS_PER_BEAT
        assert mid.tracks[0][-1].type == "end_of_track"

    def test_single_note(self) -> None:
        """A note becomes a note_on and a note_off with delta times."""
        mid = messages_to_midi(
            [NoteMessage.on(60, 0, 100), NoteMessage.off(60, 480, 100)],
            resolution=960,
        )
        note_messages = [msg for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")]
        assert [msg.type for msg in note_messages] == ["note_on", "note_off"]
        assert [msg.note for msg in note_messages] == [60, 60]
        assert [msg.time for msg in note_messages] == [0, 480]
        assert note_messages[1].velocity == 100
        assert mid.ticks_per_beat == 960

    def test_channel_and_type(self) -> None:
        mid = messages_to_midi([NoteMessage.on(60, 0, 100)], channel=3, midi_type=0)
        assert mid.type == 0
        assert mid.tracks[0][0].channel == 3

    def test_unordered_messages_rejected(self) -> None:
        with pytest.raises(ValueError, match="tick-ordered"):
            messages_to_midi([NoteMessage.on(60, 480, 100), NoteMessage.off(60, 0, 100)])

    def test_bad_settings(self) -> None:
        with pytest.raises(ValueError, match="Resolution"):
            messages_to_midi([], resolution=0)
        with pytest.raises(ValueError, match="Channel"):
            messages_to_midi([], channel=16)


class TestMidiToEventStream:
    """Test reading mido objects."""

    def test_note_on_velocity_zero_is_note_off(self) -> None:
        mid = MidiFile(ticks_per_beat=96)
        track = MidiTrack()
        mid.tracks.append(track)
        track.append(Message("note_on", note=60, velocity=90, time=0))
        track.append(Message("note_on", note=60, velocity=0, time=96))

        stream = midi_to_event_stream(mid)
        assert stream == EventStream(
            resolution=96,
            messages=(
                NoteMessage(MessageKind.ON, 60, 0, 90),
                NoteMessage(MessageKind.OFF, 60, 96, 0),
            ),
        )

    def test_tracks_are_merged_in_tick_order(self) -> None:
        mid = MidiFile(type=1, ticks_per_beat=480)
        melody = MidiTrack()
        bass = MidiTrack()
        mid.tracks.extend([melody, bass])
        melody.append(Message("note_on", note=72, velocity=100, time=240))
        melody.append(Message("note_off", note=72, velocity=0, time=240))
        bass.append(Message("note_on", note=36, velocity=100, time=0))
        bass.append(Message("note_off", note=36, velocity=0, time=960))

        stream = midi_to_event_stream(mid)
        assert [m.tick for m in stream.messages] == [0, 240, 480, 960]

        timeline = Timeline.from_messages(stream.messages, stream.resolution)
        assert canonical(timeline.notes) == [(0, 36, 960, 100), (240, 72, 480, 100)]

    def test_non_note_messages_ignored(self) -> None:
        mid = MidiFile()
        track = MidiTrack()
        mid.tracks.append(track)
        track.append(MetaMessage("set_tempo", tempo=500000, time=0))
        track.append(Message("control_change", control=64, value=127, time=10))
        track.append(Message("note_on", note=60, velocity=100, time=10))
        track.append(Message("note_off", note=60, velocity=0, time=10))

        stream = midi_to_event_stream(mid)
        assert [(m.kind, m.tick) for m in stream.messages] == [
            (MessageKind.ON, 20),
            (MessageKind.OFF, 30),
        ]


class TestFiles:
    """Round trips through real files."""

    def test_write_and_read_stream(self, temp_midi_path: Path) -> None:
        messages = [
            NoteMessage.on(60, 0, 100),
            NoteMessage.on(64, 0, 90),
            NoteMessage.off(60, 480, 100),
            NoteMessage.off(64, 480, 90),
        ]
        write_event_stream(temp_midi_path, 240, messages)

        assert temp_midi_path.exists()
        stream = read_event_stream(temp_midi_path)
        assert stream.resolution == 240
        assert list(stream.messages) == messages

    def test_timeline_round_trip(self, temp_midi_path: Path) -> None:
        """Write a progression, read it back: same notes."""
        key = Key(Mode.MAJOR, Pitch(60))
        progression = (
            ChordProgression(key)
            .add_chord_by_degree(1)
            .add_chord_by_degree(6)
            .add_chord_by_degree(4)
            .add_chord_by_degree(5)
        )
        timeline = Timeline(resolution=960)
        timeline.add_chord_progression(progression, 960, 960, 96)
        timeline.add_note(TimedNoteEvent(Pitch(36), 0, 4800, 110))
        timeline.write(temp_midi_path)

        loaded = Timeline.read(temp_midi_path)
        assert loaded.resolution == 960
        assert canonical(loaded.notes) == canonical(timeline.notes)

    def test_write_uses_settings(self, temp_midi_path: Path) -> None:
        timeline = Timeline().add_pitch(Pitch(60), 0, 480, 100)
        timeline.write(temp_midi_path, ScoreSettings(channel=5, midi_type=0))

        mid = MidiFile(str(temp_midi_path))
        assert mid.type == 0
        channels = {msg.channel for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")}
        assert channels == {5}

    def test_same_timeline_same_bytes(self, temp_dir: Path) -> None:
        """Same notes should produce identical MIDI files."""
        timeline = Timeline()
        timeline.add_pitch(Pitch(60), 0, 480, 100)
        timeline.add_pitch(Pitch(64), 480, 480, 90)

        path1 = temp_dir / "a.mid"
        path2 = temp_dir / "b.mid"
        timeline.write(path1)
        timeline.write(path2)
        assert path1.read_bytes() == path2.read_bytes()

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_event_stream(temp_dir / "missing.mid")

    def test_not_a_midi_file(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.mid"
        path.write_bytes(b"this is not a midi file at all")
        with pytest.raises(MidiFormatError):
            read_event_stream(path)

    def test_empty_file(self, temp_dir: Path) -> None:
        path = temp_dir / "empty.mid"
        path.write_bytes(b"")
        with pytest.raises(MidiFormatError):
            Timeline.read(path)
