"""
Progression analyzer - harmonic function, voice leading and cadences.

Pure: the input progression is never modified.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from pydantic import BaseModel, Field

from chuk_mcp_fretboard.constants import (
    Cadence,
    ChordType,
    Complexity,
    HarmonicFunction,
    Layer,
    VoiceLeading,
)
from chuk_mcp_fretboard.core.chord import Chord, count_common_tones
from chuk_mcp_fretboard.core.scale import Scale
from chuk_mcp_fretboard.harmony.tokens import normalize_numeral

_FUNCTIONS: dict[str, HarmonicFunction] = {
    "I": HarmonicFunction.TONIC,
    "V": HarmonicFunction.DOMINANT,
    "VII": HarmonicFunction.DOMINANT,
    "IV": HarmonicFunction.SUBDOMINANT,
    "II": HarmonicFunction.SUBDOMINANT,
    "VI": HarmonicFunction.TONIC_PREDOMINANT,
    "III": HarmonicFunction.TONIC_PREDOMINANT,
}

# Layer implied by a chord's provenance when it was never placed on one
_TYPE_LAYERS: dict[ChordType, Layer] = {
    ChordType.TRIAD: Layer.MAIN,
    ChordType.SEVENTH: Layer.MAIN,
    ChordType.SECONDARY_DOMINANT: Layer.SECONDARY,
    ChordType.MODAL_INTERCHANGE: Layer.MODAL,
    ChordType.NEAPOLITAN: Layer.NEAPOLITAN,
    ChordType.SECONDARY_DIMINISHED: Layer.SECONDARY_DIM,
}

_LAYER_FEATURES: dict[Layer, str] = {
    Layer.SECONDARY: "Contains secondary dominants",
    Layer.MODAL: "Uses modal interchange",
    Layer.NEAPOLITAN: "Includes Neapolitan harmony",
    Layer.SECONDARY_DIM: "Uses secondary diminished chords",
}

_CADENCE_FEATURES: dict[Cadence, str] = {
    Cadence.AUTHENTIC: "Perfect authentic cadence (V-I)",
    Cadence.PLAGAL: "Plagal cadence (IV-I)",
    Cadence.DECEPTIVE: "Deceptive cadence (V-vi)",
    Cadence.HALF: "Half cadence (ends on V)",
}

# (penultimate, final) degree labels -> cadence, compared case-sensitively
_CADENCES: dict[tuple[str, str], Cadence] = {
    ("V", "I"): Cadence.AUTHENTIC,
    ("IV", "I"): Cadence.PLAGAL,
    ("V", "vi"): Cadence.DECEPTIVE,
}

# Up to this many non-main chords is moderate
MODERATE_CHROMATIC_LIMIT = 2


class TransitionAnalysis(BaseModel):
    """Voice leading from the previous chord."""

    common_tones: int = Field(..., ge=0)
    quality: VoiceLeading

    model_config = {"frozen": True}


class ChordAnalysis(BaseModel):
    """One chord's place in the progression."""

    position: int = Field(..., ge=1, description="1-based position")
    symbol: str
    degree: str
    layer: Layer
    function: HarmonicFunction
    transition: TransitionAnalysis | None = None

    model_config = {"frozen": True}


class ProgressionAnalysis(BaseModel):
    """Summary of a progression in a key."""

    length: int
    key_center: str
    chords: list[ChordAnalysis] = Field(default_factory=list)
    layer_counts: dict[Layer, int] = Field(default_factory=dict)
    complexity: Complexity = Complexity.SIMPLE
    cadence: Cadence | None = None
    features: list[str] = Field(default_factory=list)


def effective_layer(chord: Chord) -> Layer:
    """The chord's layer, or the one implied by its type."""
    return chord.layer or _TYPE_LAYERS[chord.chord_type]


def harmonic_function(chord: Chord) -> HarmonicFunction:
    """
    Functional role of a chord.

    Applied chords are dominant, flat-degree borrowed chords are chromatic,
    and the borrowed iv and ii° keep the subdominant role of their degree.
    """
    if not chord.degree:
        return HarmonicFunction.UNKNOWN
    if chord.chord_type in (ChordType.SECONDARY_DOMINANT, ChordType.SECONDARY_DIMINISHED):
        return HarmonicFunction.DOMINANT
    numeral = normalize_numeral(chord.degree)
    if numeral.startswith("b"):
        return HarmonicFunction.CHROMATIC
    return _FUNCTIONS.get(numeral, HarmonicFunction.CHROMATIC)


def analyze_transition(previous: Chord, chord: Chord) -> TransitionAnalysis:
    """Common tones and voice-leading quality between two chords."""
    common = count_common_tones(previous.notes, chord.notes)
    if common == 0:
        quality = VoiceLeading.DISJUNCT
    elif common == 1:
        quality = VoiceLeading.SMOOTH
    else:
        quality = VoiceLeading.VERY_SMOOTH
    return TransitionAnalysis(common_tones=common, quality=quality)


def detect_cadence(progression: Sequence[Chord]) -> Cadence | None:
    """
    Cadence formed by the last two main-layer chords, if any.

    Degree labels are compared as written, so a minor v-i is not a perfect
    authentic cadence and only a major V ends a half cadence.
    """
    if len(progression) < 2:
        return None
    penultimate, final = progression[-2], progression[-1]
    if effective_layer(penultimate) != Layer.MAIN or effective_layer(final) != Layer.MAIN:
        return None

    pair = (penultimate.degree, final.degree)
    if pair in _CADENCES:
        return _CADENCES[pair]
    if pair[1] == "V":
        return Cadence.HALF
    return None


def analyze_progression(progression: Sequence[Chord], scale: Scale) -> ProgressionAnalysis:
    """
    Analyze a progression in the key of a scale.

    Args:
        progression: Chords in order
        scale: The key the progression is in

    Returns:
        Per-chord function and transitions, layer usage, complexity,
        cadence and notable features
    """
    chords: list[ChordAnalysis] = []
    for index, chord in enumerate(progression):
        chords.append(
            ChordAnalysis(
                position=index + 1,
                symbol=chord.symbol,
                degree=chord.degree,
                layer=effective_layer(chord),
                function=harmonic_function(chord),
                transition=analyze_transition(progression[index - 1], chord) if index else None,
            )
        )

    counts = Counter(effective_layer(chord) for chord in progression)
    layer_counts = {layer: counts.get(layer, 0) for layer in Layer}

    chromatic = len(progression) - layer_counts[Layer.MAIN]
    if chromatic == 0:
        complexity = Complexity.SIMPLE
    elif chromatic <= MODERATE_CHROMATIC_LIMIT:
        complexity = Complexity.MODERATE
    else:
        complexity = Complexity.COMPLEX

    features = [feature for layer, feature in _LAYER_FEATURES.items() if layer_counts[layer]]
    cadence = detect_cadence(progression)
    if cadence is not None:
        features.append(_CADENCE_FEATURES[cadence])

    return ProgressionAnalysis(
        length=len(progression),
        key_center=scale.root,
        chords=chords,
        layer_counts=layer_counts,
        complexity=complexity,
        cadence=cadence,
        features=features,
    )
