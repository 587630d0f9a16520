"""
Fretboard mapping - where a scale's notes fall on a stringed neck.

Pure derived data: a set-membership scan over the string x fret grid.
No geometry or rendering lives here.

Tunings are listed low to high. Strings are numbered guitar-style, so the
highest-pitched string is string 1 and the low E of standard tuning is
string 6.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_fretboard.constants import DEFAULT_MAX_FRET, DEFAULT_TUNING, TUNINGS
from chuk_mcp_fretboard.core.pitch import PitchClass, transpose_note
from chuk_mcp_fretboard.core.scale import Scale

STANDARD_TUNING = TUNINGS[DEFAULT_TUNING]

# Frets covered by one box position
BOX_WIDTH = 4


@dataclass(frozen=True)
class FretPosition:
    """A scale note at a (string, fret) coordinate."""

    string: int  # 1 = highest-pitched string
    fret: int
    note: str
    degree: str
    interval: int
    is_root: bool


@dataclass(frozen=True)
class BoxPattern:
    """A playable position spanning a small fret window."""

    start_fret: int
    end_fret: int
    positions: tuple[FretPosition, ...]


def string_number(string_index: int, string_count: int) -> int:
    """Guitar string number for a low-to-high tuning index."""
    return string_count - string_index


def note_at_fret(open_string: str, fret: int) -> str | None:
    """The note sounded at a fret of an open string."""
    return transpose_note(open_string, fret)


def get_fretboard_positions(
    scale: Scale,
    tuning: Sequence[str] = STANDARD_TUNING,
    max_fret: int = DEFAULT_MAX_FRET,
) -> list[FretPosition]:
    """
    Every position on the neck that sounds a scale note.

    Args:
        scale: The scale to map
        tuning: Open-string notes, low to high
        max_fret: Highest fret to scan (inclusive)

    Returns:
        Positions ordered by string (tuning order) then fret
    """
    pitches = scale.pitch_classes
    root = scale.root_pitch
    positions: list[FretPosition] = []

    for string_index, open_string in enumerate(tuning):
        open_pitch = PitchClass.lookup(open_string)
        if open_pitch is None:
            continue
        for fret in range(max_fret + 1):
            sounded = open_pitch.transpose(fret)
            if sounded not in pitches:
                continue
            i = pitches.index(sounded)
            positions.append(
                FretPosition(
                    string=string_number(string_index, len(tuning)),
                    fret=fret,
                    note=scale.notes[i],
                    degree=scale.degrees[i],
                    interval=scale.intervals[i],
                    is_root=sounded == root,
                )
            )

    return positions


def positions_in_range(
    scale: Scale,
    start_fret: int,
    end_fret: int,
    tuning: Sequence[str] = STANDARD_TUNING,
) -> list[FretPosition]:
    """Scale positions between two frets (inclusive)."""
    return [
        pos
        for pos in get_fretboard_positions(scale, tuning, end_fret)
        if start_fret <= pos.fret <= end_fret
    ]


def box_patterns(
    scale: Scale,
    tuning: Sequence[str] = STANDARD_TUNING,
    max_fret: int = DEFAULT_MAX_FRET,
) -> list[BoxPattern]:
    """
    Box positions anchored one fret below each root on the neck.

    Roots sharing a fret produce a single box.
    """
    boxes: list[BoxPattern] = []
    seen_frets: set[int] = set()

    for root_pos in get_fretboard_positions(scale, tuning, max_fret):
        if not root_pos.is_root or root_pos.fret in seen_frets:
            continue
        seen_frets.add(root_pos.fret)
        start = max(0, root_pos.fret - 1)
        end = start + BOX_WIDTH
        boxes.append(BoxPattern(start, end, tuple(positions_in_range(scale, start, end, tuning))))

    return boxes


def position_pattern(
    scale: Scale,
    pattern_number: int,
    tuning: Sequence[str] = STANDARD_TUNING,
) -> BoxPattern | None:
    """
    Box position by number (1-based).

    Out-of-range numbers fall back to the first box; None if the scale
    has no root on the neck.
    """
    boxes = box_patterns(scale, tuning)
    if not boxes:
        return None
    if 1 <= pattern_number <= len(boxes):
        return boxes[pattern_number - 1]
    return boxes[0]


def find_note_positions(
    note: str,
    tuning: Sequence[str] = STANDARD_TUNING,
    max_fret: int = DEFAULT_MAX_FRET,
) -> list[tuple[int, int]]:
    """All (string, fret) coordinates sounding a note."""
    target = PitchClass.lookup(note)
    if target is None:
        return []
    coordinates: list[tuple[int, int]] = []
    for string_index, open_string in enumerate(tuning):
        open_pitch = PitchClass.lookup(open_string)
        if open_pitch is None:
            continue
        for fret in range(max_fret + 1):
            if open_pitch.transpose(fret) == target:
                coordinates.append((string_number(string_index, len(tuning)), fret))
    return coordinates
