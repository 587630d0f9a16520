"""
Core music primitives - the Radix layer.

These are the invariants everything else composes on:
- PitchClass: The 12 chromatic pitch classes (0-11) and note-name arithmetic
- ScalePattern / Scale: Interval patterns and their application to a root
- FretPosition: Where scale notes fall on a tuned neck
- ChordQuality / Chord: Interval fingerprints and harmonized chords
"""

from chuk_mcp_fretboard.core.chord import (
    Chord,
    ChordQuality,
    chord_symbol,
    classify_chord,
    count_common_tones,
    harmonize_seventh_chords,
    harmonize_triads,
    roman_numeral,
)
from chuk_mcp_fretboard.core.fretboard import FretPosition, get_fretboard_positions
from chuk_mcp_fretboard.core.pitch import (
    PitchClass,
    interval_between,
    note_index,
    proper_spelling,
    transpose_note,
)
from chuk_mcp_fretboard.core.scale import (
    SCALE_PATTERNS,
    Scale,
    ScalePattern,
    generate_scale,
    get_scales_by_category,
)

__all__ = [
    # Pitch
    "PitchClass",
    "note_index",
    "transpose_note",
    "interval_between",
    "proper_spelling",
    # Scale
    "SCALE_PATTERNS",
    "ScalePattern",
    "Scale",
    "generate_scale",
    "get_scales_by_category",
    # Fretboard
    "FretPosition",
    "get_fretboard_positions",
    # Chord
    "ChordQuality",
    "Chord",
    "chord_symbol",
    "classify_chord",
    "count_common_tones",
    "harmonize_triads",
    "harmonize_seventh_chords",
    "roman_numeral",
]
