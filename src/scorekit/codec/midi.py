"""
MIDI file codec - the edge of the pipeline.

A thin adapter over mido. The rest of scorekit only sees ordered
NoteMessages at absolute ticks plus a resolution; chunks, delta times
and running status stay in here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack, merge_tracks

from scorekit.constants import MAX_CHANNEL, TICKS_PER_BEAT, ErrorMessages
from scorekit.errors import MidiFormatError
from scorekit.timeline.events import MessageKind, NoteMessage

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventStream:
    """Note messages in tick order, with the resolution they were timed at."""

    resolution: int
    messages: tuple[NoteMessage, ...]


def _check_resolution(resolution: int) -> None:
    if resolution <= 0:
        raise ValueError(ErrorMessages.RESOLUTION.format(resolution=resolution))


def messages_to_midi(
    messages: Iterable[NoteMessage],
    resolution: int = TICKS_PER_BEAT,
    channel: int = 0,
    midi_type: int = 1,
) -> MidiFile:
    """
    Convert tick-ordered note messages to a single-track MidiFile.

    Args:
        messages: Note messages, ascending by tick
        resolution: Ticks per quarter note
        channel: MIDI channel for every message (0-15)
        midi_type: MIDI file type, 0 or 1

    Returns:
        A mido MidiFile ready to be saved

    Raises:
        ValueError: If the messages are not tick-ordered or a setting is out of range
    """
    _check_resolution(resolution)
    if not 0 <= channel <= MAX_CHANNEL:
        raise ValueError(f"Channel must be 0-15, got {channel}")

    mid = MidiFile(type=midi_type, ticks_per_beat=resolution)
    track = MidiTrack()
    mid.tracks.append(track)

    # Convert to delta times
    current_time = 0
    for message in messages:
        if message.tick < current_time:
            raise ValueError(
                ErrorMessages.TICK_ORDER.format(tick=message.tick, previous=current_time)
            )
        track.append(
            Message(
                "note_on" if message.is_on else "note_off",
                channel=channel,
                note=message.pitch,
                velocity=message.velocity,
                time=message.tick - current_time,
            )
        )
        current_time = message.tick

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def midi_to_event_stream(mid: MidiFile) -> EventStream:
    """
    Flatten a MidiFile into one tick-ordered stream of note messages.

    All tracks and channels are merged. A note_on with velocity 0 is a
    note-off, as the MIDI standard allows.
    """
    messages: list[NoteMessage] = []
    tick = 0
    for msg in merge_tracks(mid.tracks):
        tick += msg.time
        if msg.type == "note_on" and msg.velocity > 0:
            messages.append(NoteMessage(MessageKind.ON, msg.note, tick, msg.velocity))
        elif msg.type in ("note_on", "note_off"):
            messages.append(NoteMessage(MessageKind.OFF, msg.note, tick, msg.velocity))
    return EventStream(resolution=mid.ticks_per_beat, messages=tuple(messages))


def read_event_stream(path: str | Path) -> EventStream:
    """
    Read a MIDI file as an ordered stream of note messages.

    Raises:
        OSError: If the file cannot be opened
        MidiFormatError: If the file is not valid MIDI
    """
    path = Path(path)
    with path.open("rb") as fh:
        try:
            mid = MidiFile(file=fh)
        except (OSError, EOFError, ValueError, KeyError, IndexError) as exc:
            raise MidiFormatError(f"Could not parse MIDI file {path}: {exc}") from exc

    stream = midi_to_event_stream(mid)
    logger.info(
        f"Read {len(stream.messages)} note messages from {path} "
        f"({len(mid.tracks)} tracks, {stream.resolution} ticks per beat)"
    )
    return stream


def write_event_stream(
    path: str | Path,
    resolution: int,
    messages: Iterable[NoteMessage],
    channel: int = 0,
    midi_type: int = 1,
) -> None:
    """
    Write tick-ordered note messages to a MIDI file.

    Raises:
        OSError: If the file cannot be written
        ValueError: If the messages are not tick-ordered
    """
    path = Path(path)
    mid = messages_to_midi(messages, resolution=resolution, channel=channel, midi_type=midi_type)
    mid.save(str(path))
    logger.info(f"Wrote {len(mid.tracks[0]) - 1} note messages to {path}")
