"""
Harmony layers - chromatic chords borrowed around a scale.

Layers built from a scale:
- main: diatonic triads
- secondary dominants: V7 of every non-tonic degree
- modal interchange: five fixed chords borrowed from the parallel minor
- Neapolitan: bII major
- secondary diminished: leading-tone dim7 of every non-tonic degree

Every chord tone is spelled for the key of the scale root.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_fretboard.constants import ChordType, Layer
from chuk_mcp_fretboard.core.chord import (
    Chord,
    ChordQuality,
    chord_symbol,
    classify_chord,
    harmonize_triads,
    require_scale,
)
from chuk_mcp_fretboard.core.pitch import PitchClass, proper_spelling
from chuk_mcp_fretboard.core.scale import Scale

logger = logging.getLogger(__name__)

# Secondary layers need a full diatonic set of degrees
MIN_SECONDARY_NOTES = 7

DOMINANT_7_SHAPE: tuple[int, ...] = (0, 4, 7, 10)
DIMINISHED_7_SHAPE: tuple[int, ...] = (0, 3, 6, 9)
MAJOR_SHAPE: tuple[int, ...] = (0, 4, 7)
MINOR_SHAPE: tuple[int, ...] = (0, 3, 7)
DIMINISHED_SHAPE: tuple[int, ...] = (0, 3, 6)

_TARGET_NUMERALS: tuple[str, ...] = ("ii", "iii", "iv", "v", "vi", "vii")

NEAPOLITAN_FUNCTION = "Pre-dominant, resolves to V or I"
LEADING_TONE_FUNCTION = "Leading tone chord"


@dataclass(frozen=True)
class BorrowedChord:
    """Static definition of a modal interchange chord relative to the root."""

    label: str
    offset: int  # semitones above the scale root
    shape: tuple[int, ...]
    scale_degree: int
    extension: str


# Order is significant: template tokens index into it
MODAL_INTERCHANGE: tuple[BorrowedChord, ...] = (
    BorrowedChord("bIII", 3, MAJOR_SHAPE, 3, "maj7"),
    BorrowedChord("bVI", 8, MAJOR_SHAPE, 6, "maj7"),
    BorrowedChord("iv", 5, MINOR_SHAPE, 4, "7"),
    BorrowedChord("bVII", 10, MAJOR_SHAPE, 7, "7"),
    BorrowedChord("ii°", 2, DIMINISHED_SHAPE, 2, "m7b5"),
)

NEAPOLITAN = BorrowedChord("bII", 1, MAJOR_SHAPE, 2, "Maj7")


@dataclass(frozen=True)
class HarmonyLayers:
    """All chord layers derived from one scale. Regenerated as a whole."""

    main_chords: tuple[Chord, ...]
    secondary_dominants: tuple[Chord, ...]
    modal_interchange: tuple[Chord, ...]
    neapolitan: tuple[Chord, ...]
    secondary_diminished: tuple[Chord, ...]

    def chords_for(self, layer: Layer) -> tuple[Chord, ...]:
        """Chords available on a layer."""
        layer_map = {
            Layer.MAIN: self.main_chords,
            Layer.SECONDARY: self.secondary_dominants,
            Layer.MODAL: self.modal_interchange,
            Layer.NEAPOLITAN: self.neapolitan,
            Layer.SECONDARY_DIM: self.secondary_diminished,
        }
        return layer_map[layer]

    def find(self, label: str) -> Chord | None:
        """Chord by degree label ('V/ii', 'bVII') or symbol ('Am'), main layer first."""
        for layer in Layer:
            for chord in self.chords_for(layer):
                if label in (chord.degree, chord.symbol):
                    return chord.with_layer(layer)
        return None

    @property
    def tonic(self) -> Chord:
        """The tonic triad."""
        return self.main_chords[0]


def _spell_stack(root: PitchClass, shape: Sequence[int], key_root: str) -> tuple[str, ...]:
    return tuple(proper_spelling(root.transpose(offset).spell(), key_root) for offset in shape)


def build_dominant(
    target: str,
    label: str,
    scale_degree: int,
    key_root: str,
) -> Chord:
    """Dominant seventh a fifth above `target`, resolving to it."""
    root = PitchClass.parse(target).transpose(7)
    notes = _spell_stack(root, DOMINANT_7_SHAPE, key_root)
    return Chord(
        root=notes[0],
        notes=notes,
        symbol=chord_symbol(notes[0], ChordQuality.DOMINANT_7),
        degree=label,
        scale_degree=scale_degree,
        chord_type=ChordType.SECONDARY_DOMINANT,
        resolves_to=target,
    )


def build_leading_tone_diminished(
    target: str,
    label: str,
    scale_degree: int,
    key_root: str,
) -> Chord:
    """Diminished seventh a half step below `target`, resolving to it."""
    root = PitchClass.parse(target).transpose(11)
    notes = _spell_stack(root, DIMINISHED_7_SHAPE, key_root)
    return Chord(
        root=notes[0],
        notes=notes,
        symbol=chord_symbol(notes[0], ChordQuality.DIMINISHED_7),
        degree=label,
        scale_degree=scale_degree,
        chord_type=ChordType.SECONDARY_DIMINISHED,
        resolves_to=target,
        function_hint=LEADING_TONE_FUNCTION,
    )


def _build_borrowed(
    definition: BorrowedChord,
    scale: Scale,
    chord_type: ChordType,
    function_hint: str | None = None,
) -> Chord:
    root = scale.root_pitch.transpose(definition.offset)
    notes = _spell_stack(root, definition.shape, scale.root)
    symbol = chord_symbol(notes[0], classify_chord(notes))
    return Chord(
        root=notes[0],
        notes=notes,
        symbol=f"{symbol} ({definition.extension})",
        degree=definition.label,
        scale_degree=definition.scale_degree,
        chord_type=chord_type,
        extension=definition.extension,
        function_hint=function_hint,
    )


def get_secondary_dominants(scale: Scale) -> list[Chord]:
    """
    V7 of each non-tonic degree (V/ii ... V/vii).

    Returns [] for scales with fewer than seven notes.
    """
    scale = require_scale(scale)
    if len(scale.notes) < MIN_SECONDARY_NOTES:
        logger.debug("Scale %s too short for secondary dominants", scale)
        return []
    return [
        build_dominant(target, f"V/{numeral}", index + 2, scale.root)
        for index, (target, numeral) in enumerate(zip(scale.notes[1:], _TARGET_NUMERALS))
    ]


def get_secondary_diminished(scale: Scale) -> list[Chord]:
    """
    Leading-tone dim7 of each non-tonic degree (vii°/ii ... vii°/vii).

    Returns [] for scales with fewer than seven notes.
    """
    scale = require_scale(scale)
    if len(scale.notes) < MIN_SECONDARY_NOTES:
        logger.debug("Scale %s too short for secondary diminished chords", scale)
        return []
    return [
        build_leading_tone_diminished(target, f"vii°/{numeral}", index + 2, scale.root)
        for index, (target, numeral) in enumerate(zip(scale.notes[1:], _TARGET_NUMERALS))
    ]


def get_modal_interchange_chords(scale: Scale) -> list[Chord]:
    """The five chords borrowed from the parallel minor: bIII, bVI, iv, bVII, ii°."""
    scale = require_scale(scale)
    return [
        _build_borrowed(definition, scale, ChordType.MODAL_INTERCHANGE)
        for definition in MODAL_INTERCHANGE
    ]


def get_neapolitan_chords(scale: Scale) -> list[Chord]:
    """The Neapolitan bII major chord."""
    scale = require_scale(scale)
    return [_build_borrowed(NEAPOLITAN, scale, ChordType.NEAPOLITAN, NEAPOLITAN_FUNCTION)]


def get_progression_layers(scale: Scale) -> HarmonyLayers:
    """Every harmony layer for a scale."""
    scale = require_scale(scale)
    return HarmonyLayers(
        main_chords=tuple(harmonize_triads(scale)),
        secondary_dominants=tuple(get_secondary_dominants(scale)),
        modal_interchange=tuple(get_modal_interchange_chords(scale)),
        neapolitan=tuple(get_neapolitan_chords(scale)),
        secondary_diminished=tuple(get_secondary_diminished(scale)),
    )
