"""
Scale primitives - ScalePattern, Scale and the scale catalog.

A ScalePattern is a static interval pattern from the root. A Scale is a
pattern applied to a root note, with every note spelled for that key.
Scale lengths vary (5, 6, 7 or 8 notes); nothing here assumes seven.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chuk_mcp_fretboard.constants import ScaleCategory
from chuk_mcp_fretboard.core.pitch import (
    PitchClass,
    interval_between,
    proper_spelling,
    transpose_note,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScalePattern:
    """
    A scale defined by semitone offsets from its root.

    Offsets are cumulative (not step sizes): a major scale is
    (0, 2, 4, 5, 7, 9, 11). Degrees run parallel to the offsets.

    Immutable and hashable.
    """

    key: str
    name: str
    intervals: tuple[int, ...]
    degrees: tuple[str, ...]
    formula: str
    category: ScaleCategory
    parent_scale: str | None = None
    mode_number: int | None = None

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Scale '{self.key}' must start at 0, got {self.intervals}")
        if any(b <= a for a, b in zip(self.intervals, self.intervals[1:])):
            raise ValueError(f"Scale '{self.key}' intervals must strictly increase")
        if self.intervals[-1] > 11:
            raise ValueError(f"Scale '{self.key}' intervals must stay within an octave")
        if len(self.degrees) != len(self.intervals):
            raise ValueError(
                f"Scale '{self.key}' has {len(self.intervals)} intervals "
                f"but {len(self.degrees)} degrees"
            )

    def __len__(self) -> int:
        return len(self.intervals)


@dataclass(frozen=True)
class Scale:
    """
    A scale pattern applied to a root.

    `notes`, `degrees` and `intervals` are parallel sequences.
    A new Scale is produced for every key/type change.
    """

    root: str
    scale_type: str
    name: str
    notes: tuple[str, ...]
    degrees: tuple[str, ...]
    intervals: tuple[int, ...]
    formula: str
    category: ScaleCategory

    @property
    def root_pitch(self) -> PitchClass:
        """Pitch class of the root."""
        return PitchClass.parse(self.root)

    @property
    def pitch_classes(self) -> tuple[PitchClass, ...]:
        """Pitch classes of every note, in scale order."""
        return tuple(PitchClass.parse(n) for n in self.notes)

    def __len__(self) -> int:
        return len(self.notes)

    def __str__(self) -> str:
        return f"{self.root} {self.name}"


def _pattern(
    key: str,
    name: str,
    intervals: tuple[int, ...],
    degrees: tuple[str, ...],
    formula: str,
    category: ScaleCategory,
    mode_number: int | None = None,
) -> ScalePattern:
    parent = "major" if mode_number is not None else None
    return ScalePattern(key, name, intervals, degrees, formula, category, parent, mode_number)


_M = ScaleCategory.MAJOR
_MIN = ScaleCategory.MINOR
_PENT = ScaleCategory.PENTATONIC
_MODE = ScaleCategory.MODES
_EXO = ScaleCategory.EXOTIC

SCALE_PATTERNS: dict[str, ScalePattern] = {
    p.key: p
    for p in (
        # Major scale and its modes
        _pattern(
            "major",
            "Major Scale (Ionian)",
            (0, 2, 4, 5, 7, 9, 11),
            ("1", "2", "3", "4", "5", "6", "7"),
            "W-W-H-W-W-W-H",
            _M,
        ),
        _pattern(
            "dorian",
            "Dorian",
            (0, 2, 3, 5, 7, 9, 10),
            ("1", "2", "b3", "4", "5", "6", "b7"),
            "W-H-W-W-W-H-W",
            _MODE,
            2,
        ),
        _pattern(
            "phrygian",
            "Phrygian",
            (0, 1, 3, 5, 7, 8, 10),
            ("1", "b2", "b3", "4", "5", "b6", "b7"),
            "H-W-W-W-H-W-W",
            _MODE,
            3,
        ),
        _pattern(
            "lydian",
            "Lydian",
            (0, 2, 4, 6, 7, 9, 11),
            ("1", "2", "3", "#4", "5", "6", "7"),
            "W-W-W-H-W-W-H",
            _MODE,
            4,
        ),
        _pattern(
            "mixolydian",
            "Mixolydian",
            (0, 2, 4, 5, 7, 9, 10),
            ("1", "2", "3", "4", "5", "6", "b7"),
            "W-W-H-W-W-H-W",
            _MODE,
            5,
        ),
        _pattern(
            "aeolian",
            "Aeolian (Natural Minor)",
            (0, 2, 3, 5, 7, 8, 10),
            ("1", "2", "b3", "4", "5", "b6", "b7"),
            "W-H-W-W-H-W-W",
            _MIN,
            6,
        ),
        _pattern(
            "locrian",
            "Locrian",
            (0, 1, 3, 5, 6, 8, 10),
            ("1", "b2", "b3", "4", "b5", "b6", "b7"),
            "H-W-W-H-W-W-W",
            _MODE,
            7,
        ),
        # Minor scales
        _pattern(
            "naturalMinor",
            "Natural Minor",
            (0, 2, 3, 5, 7, 8, 10),
            ("1", "2", "b3", "4", "5", "b6", "b7"),
            "W-H-W-W-H-W-W",
            _MIN,
        ),
        _pattern(
            "harmonicMinor",
            "Harmonic Minor",
            (0, 2, 3, 5, 7, 8, 11),
            ("1", "2", "b3", "4", "5", "b6", "7"),
            "W-H-W-W-H-WH-H",
            _MIN,
        ),
        _pattern(
            "melodicMinor",
            "Melodic Minor",
            (0, 2, 3, 5, 7, 9, 11),
            ("1", "2", "b3", "4", "5", "6", "7"),
            "W-H-W-W-W-W-H",
            _MIN,
        ),
        # Pentatonic and blues
        _pattern(
            "majorPentatonic",
            "Major Pentatonic",
            (0, 2, 4, 7, 9),
            ("1", "2", "3", "5", "6"),
            "W-W-m3-W-m3",
            _PENT,
        ),
        _pattern(
            "minorPentatonic",
            "Minor Pentatonic",
            (0, 3, 5, 7, 10),
            ("1", "b3", "4", "5", "b7"),
            "m3-W-W-m3-W",
            _PENT,
        ),
        _pattern(
            "blues",
            "Blues Scale",
            (0, 3, 5, 6, 7, 10),
            ("1", "b3", "4", "b5", "5", "b7"),
            "m3-W-H-H-m3-W",
            ScaleCategory.BLUES,
        ),
        # Exotic scales
        _pattern(
            "harmonicMajor",
            "Harmonic Major",
            (0, 2, 4, 5, 7, 8, 11),
            ("1", "2", "3", "4", "5", "b6", "7"),
            "W-W-H-W-H-WH-H",
            _EXO,
        ),
        _pattern(
            "hungarianMinor",
            "Hungarian Minor",
            (0, 2, 3, 6, 7, 8, 11),
            ("1", "2", "b3", "#4", "5", "b6", "7"),
            "W-H-WH-H-H-WH-H",
            _EXO,
        ),
        _pattern(
            "doubleHarmonic",
            "Double Harmonic (Byzantine)",
            (0, 1, 4, 5, 7, 8, 11),
            ("1", "b2", "3", "4", "5", "b6", "7"),
            "H-WH-H-W-H-WH-H",
            _EXO,
        ),
        _pattern(
            "neapolitanMinor",
            "Neapolitan Minor",
            (0, 1, 3, 5, 7, 8, 11),
            ("1", "b2", "b3", "4", "5", "b6", "7"),
            "H-W-W-W-H-WH-H",
            _EXO,
        ),
        _pattern(
            "neapolitanMajor",
            "Neapolitan Major",
            (0, 1, 3, 5, 7, 9, 11),
            ("1", "b2", "b3", "4", "5", "6", "7"),
            "H-W-W-W-W-W-H",
            _EXO,
        ),
        _pattern(
            "enigmatic",
            "Enigmatic Scale",
            (0, 1, 4, 6, 8, 10, 11),
            ("1", "b2", "3", "#4", "#5", "#6", "7"),
            "H-WH-W-W-W-H-H",
            _EXO,
        ),
        _pattern(
            "persian",
            "Persian Scale",
            (0, 1, 4, 5, 6, 8, 11),
            ("1", "b2", "3", "4", "b5", "b6", "7"),
            "H-WH-H-H-W-WH-H",
            _EXO,
        ),
        _pattern(
            "altered",
            "Altered Scale (Super Locrian)",
            (0, 1, 3, 4, 6, 8, 10),
            ("1", "b2", "b3", "b4", "b5", "b6", "b7"),
            "H-W-H-W-W-W-W",
            _EXO,
        ),
        _pattern(
            "wholeTone",
            "Whole Tone Scale",
            (0, 2, 4, 6, 8, 10),
            ("1", "2", "3", "#4", "#5", "b7"),
            "W-W-W-W-W-W",
            _EXO,
        ),
        _pattern(
            "diminished",
            "Diminished Scale (Whole-Half)",
            (0, 2, 3, 5, 6, 8, 9, 11),
            ("1", "2", "b3", "4", "b5", "#5", "6", "7"),
            "W-H-W-H-W-H-W-H",
            _EXO,
        ),
        _pattern(
            "halfWholeDiminished",
            "Half-Whole Diminished",
            (0, 1, 3, 4, 6, 7, 9, 10),
            ("1", "b2", "b3", "3", "#4", "5", "6", "b7"),
            "H-W-H-W-H-W-H-W",
            _EXO,
        ),
        _pattern(
            "augmented",
            "Augmented Scale",
            (0, 3, 4, 7, 8, 11),
            ("1", "#2", "3", "#4", "5", "#6"),
            "m3-H-m3-H-m3-H",
            _EXO,
        ),
        _pattern(
            "prometheus",
            "Prometheus Scale",
            (0, 2, 4, 6, 9, 10),
            ("1", "2", "3", "#4", "6", "b7"),
            "W-W-W-m3-H-m3",
            _EXO,
        ),
        _pattern(
            "hirajoshi",
            "Hirajoshi Scale",
            (0, 2, 3, 7, 8),
            ("1", "2", "b3", "5", "b6"),
            "W-H-M3-H-M3",
            _EXO,
        ),
        _pattern(
            "inSen",
            "In-Sen Scale",
            (0, 1, 5, 7, 10),
            ("1", "b2", "4", "5", "b7"),
            "H-M3-W-m3-W",
            _EXO,
        ),
        _pattern(
            "iwato",
            "Iwato Scale",
            (0, 1, 5, 6, 10),
            ("1", "b2", "4", "b5", "b7"),
            "H-M3-H-M3-W",
            _EXO,
        ),
        _pattern(
            "yo",
            "Yo Scale",
            (0, 2, 5, 7, 9),
            ("1", "2", "4", "5", "6"),
            "W-m3-W-W-m3",
            _EXO,
        ),
        _pattern(
            "spanish",
            "Spanish Scale (Phrygian Dominant)",
            (0, 1, 4, 5, 7, 8, 10),
            ("1", "b2", "3", "4", "5", "b6", "b7"),
            "H-WH-H-W-H-W-W",
            _EXO,
        ),
        _pattern(
            "jewish",
            "Jewish Scale (Ahava Rabboh)",
            (0, 1, 4, 5, 7, 8, 10),
            ("1", "b2", "3", "4", "5", "b6", "b7"),
            "H-WH-H-W-H-W-W",
            _EXO,
        ),
        _pattern(
            "arabic",
            "Arabic Scale",
            (0, 2, 4, 5, 6, 8, 10),
            ("1", "2", "3", "4", "b5", "b6", "b7"),
            "W-W-H-H-W-W-W",
            _EXO,
        ),
        _pattern(
            "egyptian",
            "Egyptian Scale",
            (0, 2, 5, 7, 10),
            ("1", "2", "4", "5", "b7"),
            "W-m3-W-m3-W",
            _EXO,
        ),
    )
}

# Modes of the major scale by number (1 = Ionian)
MODE_KEYS: tuple[str, ...] = (
    "major",
    "dorian",
    "phrygian",
    "lydian",
    "mixolydian",
    "aeolian",
    "locrian",
)


def get_scale_pattern(scale_type: str) -> ScalePattern | None:
    """Get a scale pattern by key, or None if unknown."""
    return SCALE_PATTERNS.get(scale_type)


def get_all_scale_keys() -> list[str]:
    """All scale keys in catalog order."""
    return list(SCALE_PATTERNS)


def get_scales_by_category() -> dict[ScaleCategory, list[ScalePattern]]:
    """Scale patterns grouped by category, every category present."""
    categories: dict[ScaleCategory, list[ScalePattern]] = {c: [] for c in ScaleCategory}
    for pattern in SCALE_PATTERNS.values():
        categories[pattern.category].append(pattern)
    return categories


def generate_scale(root: str, scale_type: str) -> Scale | None:
    """
    Apply a scale pattern to a root note.

    Each offset is transposed from the root and spelled for the key.

    Args:
        root: Root note name ('C', 'F#', 'Bb')
        scale_type: Scale key from the catalog ('major', 'dorian', ...)

    Returns:
        The generated Scale, or None for an unknown root or scale type
    """
    pattern = get_scale_pattern(scale_type)
    if pattern is None:
        logger.warning("Scale type '%s' not found", scale_type)
        return None

    notes: list[str] = []
    for offset in pattern.intervals:
        note = transpose_note(root, offset)
        if note is None:
            logger.warning("Invalid root note '%s'", root)
            return None
        notes.append(proper_spelling(note, root))

    return Scale(
        root=notes[0],
        scale_type=scale_type,
        name=pattern.name,
        notes=tuple(notes),
        degrees=pattern.degrees,
        intervals=pattern.intervals,
        formula=pattern.formula,
        category=pattern.category,
    )


def relative_scale(scale: Scale) -> Scale | None:
    """
    Relative major/minor of a scale.

    Minor scales map to the major a minor third up, major scales to the
    natural minor a major sixth up. Other categories have no relative.
    """
    if scale.category == ScaleCategory.MINOR:
        return generate_scale(scale.root_pitch.transpose(3).spell(), "major")
    if scale.category == ScaleCategory.MAJOR:
        return generate_scale(scale.root_pitch.transpose(9).spell(), "naturalMinor")
    return None


def parallel_scale(scale: Scale) -> Scale | None:
    """Parallel major/minor of a scale (same root, opposite quality)."""
    if scale.category == ScaleCategory.MINOR:
        return generate_scale(scale.root, "major")
    if scale.category == ScaleCategory.MAJOR:
        return generate_scale(scale.root, "naturalMinor")
    return None


def get_mode(mode_number: int, root: str) -> Scale | None:
    """Mode 1-7 of the major scale built on root."""
    if not 1 <= mode_number <= len(MODE_KEYS):
        logger.warning("Invalid mode number %d (expected 1-7)", mode_number)
        return None
    return generate_scale(root, MODE_KEYS[mode_number - 1])


def get_all_modes(scale: Scale) -> list[Scale]:
    """
    The seven modes built on the first seven notes of a scale.

    Returns [] for scales with fewer than seven notes.
    """
    if len(scale) < len(MODE_KEYS):
        return []
    modes = [get_mode(i + 1, scale.notes[i]) for i in range(len(MODE_KEYS))]
    return [m for m in modes if m is not None]


def degree_for_note(scale: Scale, note: str) -> str | None:
    """Degree label of a note in the scale, or None if it is not a member."""
    for scale_note, degree in zip(scale.notes, scale.degrees):
        if interval_between(scale_note, note) == 0:
            return degree
    return None


def is_note_in_scale(scale: Scale, note: str) -> bool:
    """Check pitch-class membership of a note in the scale."""
    return degree_for_note(scale, note) is not None
