"""
MIDI export - render a chord progression as block chords.

Conversion from note events to MIDI files uses mido.
All operations are deterministic: same input → same output.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_fretboard.core.pitch import PitchClass

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chuk_mcp_fretboard.core.chord import Chord


# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480

DEFAULT_VELOCITY = 90


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a single-track MidiFile.

    Args:
        events: Note events
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    # note_off before note_on at the same tick so repeated chords retrigger cleanly
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off", x[1].note))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def voice_chord(chord: Chord, octave: int = 4) -> list[int]:
    """
    Close voicing in root position.

    The root sits in `octave` and every following tone is the nearest
    pitch above the previous one.
    """
    pitches: list[int] = []
    for note in chord.all_notes:
        pitch = PitchClass.parse(note).to_midi(octave)
        if pitches:
            while pitch <= pitches[-1]:
                pitch += 12
            while pitch - 12 > pitches[-1]:
                pitch -= 12
        pitches.append(pitch)
    return pitches


def progression_to_events(
    progression: Sequence[Chord],
    beats_per_chord: int = 4,
    octave: int = 4,
    velocity: int = DEFAULT_VELOCITY,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """One block chord per progression entry, back to back."""
    duration = beats_per_chord * ticks_per_beat
    events: list[MidiEvent] = []
    for index, chord in enumerate(progression):
        start = index * duration
        for pitch in voice_chord(chord, octave):
            events.append(
                MidiEvent(
                    pitch=pitch,
                    start_ticks=start,
                    duration_ticks=duration,
                    velocity=velocity,
                )
            )
    return events


def progression_to_midi(
    progression: Sequence[Chord],
    tempo_bpm: int = 120,
    beats_per_chord: int = 4,
    octave: int = 4,
) -> MidiFile:
    """
    Render a progression as block chords.

    Args:
        progression: Chords in order
        tempo_bpm: Tempo in beats per minute
        beats_per_chord: Length of each chord in beats
        octave: Octave of each chord root (4 = middle C)

    Returns:
        A mido MidiFile
    """
    if beats_per_chord <= 0:
        raise ValueError(f"beats_per_chord must be positive, got {beats_per_chord}")
    events = progression_to_events(progression, beats_per_chord, octave)
    return events_to_midi(events, tempo_bpm=tempo_bpm)


def save_progression_midi(
    progression: Sequence[Chord],
    path: Path,
    tempo_bpm: int = 120,
    beats_per_chord: int = 4,
    octave: int = 4,
) -> Path:
    """Render a progression and write it to `path`, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    progression_to_midi(progression, tempo_bpm, beats_per_chord, octave).save(str(path))
    return path
