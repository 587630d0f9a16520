"""
Export - progressions to MIDI files.
"""

from chuk_mcp_fretboard.export.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    progression_to_midi,
    save_progression_midi,
    voice_chord,
)

__all__ = [
    "TICKS_PER_BEAT",
    "MidiEvent",
    "events_to_midi",
    "progression_to_midi",
    "save_progression_midi",
    "voice_chord",
]
