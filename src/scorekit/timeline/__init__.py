"""
Timeline - notes in time and their MIDI translation.

    Chord / ChordProgression / Pitch
    → Timeline (TimedNoteEvents, insertion order)
    → NoteMessages (tick-ordered note-on/note-off)
    → MIDI file
"""

from scorekit.timeline.events import MessageKind, NoteMessage, TimedNoteEvent
from scorekit.timeline.snapshot import NoteSnapshot, TimelineSnapshot
from scorekit.timeline.song import Timeline

__all__ = [
    "MessageKind",
    "NoteMessage",
    "NoteSnapshot",
    "TimedNoteEvent",
    "Timeline",
    "TimelineSnapshot",
]
