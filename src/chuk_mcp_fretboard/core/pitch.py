"""
Pitch primitives - PitchClass and note-name arithmetic.

PitchClass represents the 12 chromatic pitches (octave-independent).
All arithmetic is mod 12. Note names are the interchange format with the
rest of the system; spelling (sharp vs flat) is only decided when a name
is produced, based on whether the key root is a flat key.

Unrecognized note names are an absent result (None), never an exception.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

from chuk_mcp_fretboard.constants import FLAT_KEYS

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

# Sharp name -> flat alias, for the five black keys
ALTERNATE_NAMES: dict[str, str] = {
    sharp: flat for sharp, flat in zip(_SHARP_NAMES, _FLAT_NAMES) if sharp != flat
}

_INTERVAL_NAMES: dict[int, str] = {
    0: "P1",
    1: "m2",
    2: "M2",
    3: "m3",
    4: "M3",
    5: "P4",
    6: "TT",
    7: "P5",
    8: "m6",
    9: "M6",
    10: "m7",
    11: "M7",
}

_INTERVAL_QUALITIES: dict[int, str] = {
    0: "Perfect Unison",
    1: "Minor Second",
    2: "Major Second",
    3: "Minor Third",
    4: "Major Third",
    5: "Perfect Fourth",
    6: "Tritone",
    7: "Perfect Fifth",
    8: "Minor Sixth",
    9: "Major Sixth",
    10: "Minor Seventh",
    11: "Major Seventh",
}


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> int:
        """Ascending distance in semitones from this pitch class to another."""
        return (other.value - self.value) % 12

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def frequency(self, octave: int = 4) -> float:
        """Equal-tempered frequency in Hz, A4 = 440."""
        return 440.0 * 2 ** ((self.to_midi(octave) - 69) / 12)

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def lookup(cls, name: str) -> PitchClass | None:
        """Look up a note name like 'C', 'C#', 'Db'. Returns None if unrecognized."""
        if name in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(name))
        if name in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(name))
        return None

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db' or 'Cs'."""
        name = name.strip()

        found = cls.lookup(name)
        if found is not None:
            return found

        # Try enum names (C, Cs, D, Ds, etc.)
        name_upper = name.upper()
        for member in cls:
            if member.name.upper() == name_upper:
                return member

        raise ValueError(f"Unknown pitch class: {name}")


def note_index(note: str) -> int | None:
    """Chromatic index (0-11) of a note name, or None if unrecognized."""
    pitch = PitchClass.lookup(note)
    return None if pitch is None else pitch.value


def is_valid_note(note: str) -> bool:
    """Check whether a note name is recognized."""
    return note_index(note) is not None


def transpose_note(note: str, semitones: int) -> str | None:
    """
    Transpose a note name, returning the canonical sharp spelling.

    Returns None if the note is unrecognized.
    """
    pitch = PitchClass.lookup(note)
    if pitch is None:
        return None
    return pitch.transpose(semitones).spell()


def interval_between(a: str, b: str) -> int | None:
    """
    Ascending distance in semitones from a to b (0-11).

    This is not a signed or absolute interval: chord-quality detection
    relies on measuring upward from the chord root.
    """
    first = PitchClass.lookup(a)
    second = PitchClass.lookup(b)
    if first is None or second is None:
        return None
    return first.interval_to(second)


def interval_name(semitones: int) -> str:
    """Short interval name (P1, m3, TT...)."""
    return _INTERVAL_NAMES.get(semitones, "Unknown")


def interval_quality_name(semitones: int) -> str:
    """Long interval name ("Minor Third", "Tritone"...)."""
    return _INTERVAL_QUALITIES.get(semitones, "Unknown")


def enharmonic(note: str) -> str:
    """Swap a black-key note between its sharp and flat spelling."""
    if note in ALTERNATE_NAMES:
        return ALTERNATE_NAMES[note]
    for sharp, flat in ALTERNATE_NAMES.items():
        if flat == note:
            return sharp
    return note


def normalize_note(note: str, prefer_flats: bool = False) -> str:
    """Respell a note canonically; unrecognized names are returned unchanged."""
    pitch = PitchClass.lookup(note)
    if pitch is None:
        return note
    return pitch.spell(prefer_flats)


def should_use_flats(root: str) -> bool:
    """Whether a key rooted on this note is spelled with flats."""
    return root in FLAT_KEYS


def proper_spelling(note: str, root: str) -> str:
    """Spell a note the way the key of `root` would."""
    return normalize_note(note, should_use_flats(root))


def chromatic_scale(root: str) -> list[str]:
    """All twelve notes starting from root, or [] for an unknown root."""
    start = PitchClass.lookup(root)
    if start is None:
        return []
    return [start.transpose(i).spell() for i in range(12)]


def circle_of_fifths() -> list[str]:
    """The twelve roots ordered by ascending fifths from C."""
    return [PitchClass.C.transpose(7 * i).spell() for i in range(12)]


def circle_of_fourths() -> list[str]:
    """The twelve roots ordered by ascending fourths from C."""
    return [PitchClass.C.transpose(5 * i).spell() for i in range(12)]


def sort_notes(notes: Iterable[str], start: str = "C") -> list[str]:
    """Sort note names by chromatic distance above `start`."""
    origin = PitchClass.parse(start)
    return sorted(notes, key=lambda n: origin.interval_to(PitchClass.parse(n)))


def unique_notes(notes: Iterable[str]) -> list[str]:
    """Drop enharmonic duplicates, keeping the first spelling seen."""
    seen: set[str] = set()
    result: list[str] = []
    for note in notes:
        normalized = normalize_note(note)
        if normalized in seen:
            continue
        seen.add(normalized)
        result.append(note)
    return result
