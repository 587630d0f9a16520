"""
Chord primitives - ChordQuality, Chord and scale harmonization.

Chords are built by stacking thirds inside a scale's own note sequence.
Quality is never stored: it is recomputed from the interval fingerprint
between the root and the upper tones. An unmatched fingerprint is the
explicit UNKNOWN quality and still produces a chord record.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from chuk_mcp_fretboard.constants import ChordType, Layer
from chuk_mcp_fretboard.core.pitch import PitchClass, interval_between
from chuk_mcp_fretboard.core.scale import Scale


class ChordQuality(str, Enum):
    """Chord qualities recognised from interval fingerprints."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
    MAJOR_7 = "major7"
    MINOR_7 = "minor7"
    DOMINANT_7 = "dominant7"
    HALF_DIMINISHED_7 = "halfDiminished7"
    DIMINISHED_7 = "diminished7"
    MINOR_MAJOR_7 = "minorMajor7"
    AUGMENTED_7 = "augmented7"
    UNKNOWN = "unknown"

    @property
    def suffix(self) -> str:
        """Symbol suffix appended to the root name."""
        return _SUFFIXES[self]

    @property
    def is_lowercase_numeral(self) -> bool:
        """
        Whether the Roman numeral is written in lowercase.

        Case-sensitive substring test on the value: halfDiminished7 stays
        uppercase, minorMajor7 goes lowercase.
        """
        return "minor" in self.value or "diminished" in self.value


_SUFFIXES: dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
    ChordQuality.DIMINISHED: "dim",
    ChordQuality.AUGMENTED: "aug",
    ChordQuality.MAJOR_7: "maj7",
    ChordQuality.MINOR_7: "m7",
    ChordQuality.DOMINANT_7: "7",
    ChordQuality.HALF_DIMINISHED_7: "m7b5",
    ChordQuality.DIMINISHED_7: "dim7",
    ChordQuality.MINOR_MAJOR_7: "mMaj7",
    ChordQuality.AUGMENTED_7: "aug7",
    ChordQuality.UNKNOWN: "",
}

# (third, fifth) semitones from the root
_TRIAD_FINGERPRINTS: dict[tuple[int, int], ChordQuality] = {
    (4, 7): ChordQuality.MAJOR,
    (3, 7): ChordQuality.MINOR,
    (3, 6): ChordQuality.DIMINISHED,
    (4, 8): ChordQuality.AUGMENTED,
}

# (third, fifth, seventh) semitones from the root
_SEVENTH_FINGERPRINTS: dict[tuple[int, int, int], ChordQuality] = {
    (4, 7, 11): ChordQuality.MAJOR_7,
    (3, 7, 10): ChordQuality.MINOR_7,
    (4, 7, 10): ChordQuality.DOMINANT_7,
    (3, 6, 10): ChordQuality.HALF_DIMINISHED_7,
    (3, 6, 9): ChordQuality.DIMINISHED_7,
    (3, 7, 11): ChordQuality.MINOR_MAJOR_7,
    (4, 8, 10): ChordQuality.AUGMENTED_7,
}

_NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")

# Semitones above the root for 9th, 11th and 13th extensions
_EXTENSION_OFFSETS: dict[int, int] = {9: 14, 11: 17, 13: 21}

_TONE_NAMES: tuple[str, ...] = (
    "root",
    "third",
    "fifth",
    "seventh",
    "ninth",
    "eleventh",
    "thirteenth",
)


def _fingerprint(notes: Sequence[str]) -> tuple[int, ...] | None:
    intervals = [interval_between(notes[0], n) for n in notes[1:]]
    if any(i is None for i in intervals):
        return None
    return tuple(i for i in intervals if i is not None)


def classify_triad(root: str, third: str, fifth: str) -> ChordQuality:
    """Quality of a three-note stack measured upward from the root."""
    fingerprint = _fingerprint((root, third, fifth))
    if fingerprint is None:
        return ChordQuality.UNKNOWN
    return _TRIAD_FINGERPRINTS.get(fingerprint, ChordQuality.UNKNOWN)  # type: ignore[arg-type]


def classify_seventh(root: str, third: str, fifth: str, seventh: str) -> ChordQuality:
    """Quality of a four-note stack measured upward from the root."""
    fingerprint = _fingerprint((root, third, fifth, seventh))
    if fingerprint is None:
        return ChordQuality.UNKNOWN
    return _SEVENTH_FINGERPRINTS.get(fingerprint, ChordQuality.UNKNOWN)  # type: ignore[arg-type]


def classify_chord(notes: Sequence[str]) -> ChordQuality:
    """Quality of a 3- or 4-note chord; anything else is UNKNOWN."""
    if len(notes) == 3:
        return classify_triad(*notes)
    if len(notes) == 4:
        return classify_seventh(*notes)
    return ChordQuality.UNKNOWN


def roman_numeral(scale_degree: int, quality: ChordQuality) -> str:
    """
    Roman numeral for a 1-based scale degree.

    Degrees beyond VII (octatonic scales) have no numeral and yield "".
    """
    if not 1 <= scale_degree <= len(_NUMERALS):
        return ""
    numeral = _NUMERALS[scale_degree - 1]
    return numeral.lower() if quality.is_lowercase_numeral else numeral


def chord_symbol(root: str, quality: ChordQuality) -> str:
    """Chord symbol such as 'Cmaj7', 'Dm', 'Bdim'."""
    return f"{root}{quality.suffix}"


def count_common_tones(first: Iterable[str], second: Iterable[str]) -> int:
    """Number of pitch classes two note collections share."""
    a = {PitchClass.parse(n) for n in first}
    b = {PitchClass.parse(n) for n in second}
    return len(a & b)


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord with spelled notes and its place in a key.

    Quality is derived from the notes, never stored. `layer` is only set
    once the chord is placed in a progression; `expects_resolution` is an
    annotation added by the composer's resolution pass.
    """

    root: str
    notes: tuple[str, ...]
    symbol: str
    degree: str  # Roman numeral label (I, ii, V/vi, bVII...)
    scale_degree: int  # 1-based
    chord_type: ChordType
    resolves_to: str | None = None
    extension: str | None = None
    function_hint: str | None = None
    layer: Layer | None = None
    expects_resolution: str | None = None
    extensions: tuple[int, ...] = field(default=())

    @property
    def quality(self) -> ChordQuality:
        """Quality recomputed from the interval fingerprint."""
        return classify_chord(self.notes)

    @property
    def root_pitch(self) -> PitchClass:
        """Pitch class of the root."""
        return PitchClass.parse(self.root)

    @property
    def pitch_classes(self) -> frozenset[PitchClass]:
        """Pitch classes of the chord tones."""
        return frozenset(PitchClass.parse(n) for n in self.notes)

    @property
    def all_notes(self) -> tuple[str, ...]:
        """Chord tones followed by any added extensions."""
        extra = tuple(
            self.root_pitch.transpose(_EXTENSION_OFFSETS[ext]).spell() for ext in self.extensions
        )
        return self.notes + extra

    def same_harmony(self, other: Chord) -> bool:
        """Same root pitch and same quality."""
        return self.root_pitch == other.root_pitch and self.quality == other.quality

    def with_layer(self, layer: Layer) -> Chord:
        """Copy of this chord placed on a layer."""
        return replace(self, layer=layer)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation."""
        data: dict[str, Any] = {
            "root": self.root,
            "notes": list(self.notes),
            "quality": self.quality.value,
            "symbol": self.symbol,
            "degree": self.degree,
            "scale_degree": self.scale_degree,
            "type": self.chord_type.value,
        }
        if self.resolves_to is not None:
            data["resolves_to"] = self.resolves_to
        if self.extension is not None:
            data["extension"] = self.extension
        if self.function_hint is not None:
            data["function"] = self.function_hint
        if self.layer is not None:
            data["layer"] = self.layer.value
        if self.expects_resolution is not None:
            data["expects_resolution"] = self.expects_resolution
        if self.extensions:
            data["extensions"] = list(self.extensions)
        return data

    def __str__(self) -> str:
        return self.symbol


def require_scale(scale: object) -> Scale:
    """
    Guard for the harmonizer and harmony generators.

    A missing or malformed scale here is a programming error, not an
    absent result.
    """
    if not isinstance(scale, Scale):
        raise ValueError(f"Expected a Scale, got {type(scale).__name__}")
    if not scale.notes:
        raise ValueError("Scale has no notes")
    return scale


def _stack(scale: Scale, index: int, size: int) -> tuple[str, ...]:
    n = len(scale.notes)
    return tuple(scale.notes[(index + 2 * k) % n] for k in range(size))


def _harmonize(scale: Scale, size: int, chord_type: ChordType) -> list[Chord]:
    chords: list[Chord] = []
    for index, root in enumerate(scale.notes):
        notes = _stack(scale, index, size)
        quality = classify_chord(notes)
        chords.append(
            Chord(
                root=root,
                notes=notes,
                symbol=chord_symbol(root, quality),
                degree=roman_numeral(index + 1, quality),
                scale_degree=index + 1,
                chord_type=chord_type,
            )
        )
    return chords


def harmonize_triads(scale: Scale) -> list[Chord]:
    """
    Triads on every scale degree, stacked in scale thirds.

    Thirds are taken inside the scale's own note sequence with wrap-around,
    so non-heptatonic scales produce unconventional stacks (often UNKNOWN).

    Returns [] for scales with fewer than three notes.
    """
    scale = require_scale(scale)
    if len(scale.notes) < 3:
        return []
    return _harmonize(scale, 3, ChordType.TRIAD)


def harmonize_seventh_chords(scale: Scale) -> list[Chord]:
    """
    Seventh chords on every scale degree, stacked in scale thirds.

    Returns [] for scales with fewer than four notes.
    """
    scale = require_scale(scale)
    if len(scale.notes) < 4:
        return []
    return _harmonize(scale, 4, ChordType.SEVENTH)


@dataclass(frozen=True)
class CommonProgression:
    """A named diatonic progression."""

    name: str
    description: str
    chords: tuple[Chord, ...]


# (name, description, 0-based degree indices)
_COMMON_PROGRESSIONS: tuple[tuple[str, str, tuple[int, ...]], ...] = (
    ("I-IV-V", "Classic progression", (0, 3, 4)),
    ("I-V-vi-IV", "Pop progression", (0, 4, 5, 3)),
    ("ii-V-I", "Jazz progression", (1, 4, 0)),
    ("I-vi-IV-V", "50s progression", (0, 5, 3, 4)),
    ("vi-IV-I-V", "Sensitive progression", (5, 3, 0, 4)),
    ("I-IV-vi-V", "Alternative pop", (0, 3, 5, 4)),
)


def get_common_progressions(scale: Scale) -> list[CommonProgression]:
    """Well-known diatonic progressions in this scale (heptatonic scales only)."""
    triads = harmonize_triads(scale)
    if len(triads) < 7:
        return []
    return [
        CommonProgression(name, description, tuple(triads[i] for i in indices))
        for name, description, indices in _COMMON_PROGRESSIONS
    ]


@dataclass(frozen=True)
class Substitution:
    """A diatonic triad that can stand in for another chord."""

    chord: Chord
    shared_notes: int
    kind: str  # "common tone" or "strong"


def get_substitutions(chord: Chord, scale: Scale) -> list[Substitution]:
    """Diatonic triads sharing at least two tones with the chord."""
    substitutions: list[Substitution] = []
    for triad in harmonize_triads(scale):
        if triad.root_pitch == chord.root_pitch:
            continue
        shared = len(chord.pitch_classes & triad.pitch_classes)
        if shared >= 2:
            kind = "common tone" if shared == 2 else "strong"
            substitutions.append(Substitution(triad, shared, kind))
    return substitutions


def extend_chord(chord: Chord, extensions: Iterable[int]) -> Chord:
    """Add 9th/11th/13th tones; other numbers are ignored."""
    valid = tuple(ext for ext in extensions if ext in _EXTENSION_OFFSETS)
    return replace(chord, extensions=chord.extensions + valid)


@dataclass(frozen=True)
class ChordTone:
    """Role of a note inside a chord."""

    tone_name: str
    position: int  # 1-based


def analyze_chord_tone(note: str, chord: Chord) -> ChordTone | None:
    """Which chord tone a note is, or None if it is not in the chord."""
    target = PitchClass.lookup(note)
    if target is None:
        return None
    for i, chord_note in enumerate(chord.all_notes):
        if PitchClass.parse(chord_note) == target:
            name = _TONE_NAMES[i] if i < len(_TONE_NAMES) else "extension"
            return ChordTone(name, i + 1)
    return None


def chords_containing_note(note: str, chords: Iterable[Chord]) -> list[Chord]:
    """Chords that contain a note (pitch-class match)."""
    target = PitchClass.lookup(note)
    if target is None:
        return []
    return [c for c in chords if target in c.pitch_classes]
