"""MIDI file codec (mido adapter)."""

from scorekit.codec.midi import (
    EventStream,
    messages_to_midi,
    midi_to_event_stream,
    read_event_stream,
    write_event_stream,
)

__all__ = [
    "EventStream",
    "messages_to_midi",
    "midi_to_event_stream",
    "read_event_stream",
    "write_event_stream",
]
