"""
Degree tokens - parsed chord references used by progression templates.

Templates list chords as numbers (0-6 for diatonic I-VII) or strings such
as 'V/ii', 'vii°/V', 'bVII' and 'bII'. Each entry is parsed once, when the
style catalog loads, into a tagged union:

    Diatonic | SecondaryDominant | SecondaryDiminished
    | ModalInterchange | Neapolitan | Unrecognized

Resolution against a scale's HarmonyLayers is then a plain dispatch on the
token kind. Unrecognized tokens resolve to the tonic.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from chuk_mcp_fretboard.constants import Layer
from chuk_mcp_fretboard.core.chord import Chord
from chuk_mcp_fretboard.core.pitch import PitchClass, proper_spelling
from chuk_mcp_fretboard.harmony.layers import (
    MODAL_INTERCHANGE,
    NEAPOLITAN,
    HarmonyLayers,
    build_dominant,
)

_NUMERAL_INDEX: dict[str, int] = {
    "I": 0,
    "II": 1,
    "III": 2,
    "IV": 3,
    "V": 4,
    "VI": 5,
    "VII": 6,
}

# Lowered degrees that can be tonicized: label -> (semitones above root, scale degree)
_FLAT_DEGREES: dict[str, tuple[int, int]] = {
    "bII": (1, 2),
    "bIII": (3, 3),
    "bVI": (8, 6),
    "bVII": (10, 7),
}

_MODAL_LABELS: dict[str, int] = {chord.label: i for i, chord in enumerate(MODAL_INTERCHANGE)}


def numeral_index(numeral: str) -> int | None:
    """0-based degree of a plain Roman numeral, either case ('ii' -> 1)."""
    return _NUMERAL_INDEX.get(numeral.upper())


def normalize_numeral(numeral: str) -> str:
    """
    Case-folded numeral for table lookups.

    'vi' -> 'VI', 'vii°' -> 'VII', 'bvii' -> 'bVII'. The flat prefix stays
    lowercase so 'bVII' never collides with a plain numeral.
    """
    text = numeral.strip().rstrip("°")
    if len(text) > 1 and text[0] in "bB" and text[1].upper() in "IV":
        return "b" + text[1:].upper()
    return text.upper()


class DiatonicToken(BaseModel):
    """Diatonic chord by 0-based degree."""

    kind: Literal["diatonic"] = "diatonic"
    index: int = Field(..., ge=0, le=6)

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return str(self.index)


class SecondaryDominantToken(BaseModel):
    """V/<target>: dominant seventh resolving to the target degree."""

    kind: Literal["secondary-dominant"] = "secondary-dominant"
    target: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"V/{self.target}"


class SecondaryDiminishedToken(BaseModel):
    """vii°/<target>: leading-tone diminished seventh of the target degree."""

    kind: Literal["secondary-diminished"] = "secondary-diminished"
    target: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"vii°/{self.target}"


class ModalInterchangeToken(BaseModel):
    """One of the five borrowed chords, by position in the modal layer."""

    kind: Literal["modal-interchange"] = "modal-interchange"
    variant: int = Field(..., ge=0, lt=len(MODAL_INTERCHANGE))

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return MODAL_INTERCHANGE[self.variant].label


class NeapolitanToken(BaseModel):
    """The bII chord."""

    kind: Literal["neapolitan"] = "neapolitan"

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return NEAPOLITAN.label


class UnrecognizedToken(BaseModel):
    """Anything else; resolves to the tonic."""

    kind: Literal["unrecognized"] = "unrecognized"
    text: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.text


DegreeToken = Annotated[
    Union[
        DiatonicToken,
        SecondaryDominantToken,
        SecondaryDiminishedToken,
        ModalInterchangeToken,
        NeapolitanToken,
        UnrecognizedToken,
    ],
    Field(discriminator="kind"),
]


def parse_token(raw: int | str) -> DegreeToken:
    """
    Parse a template entry.

    Args:
        raw: 0-6 for a diatonic degree, or a chord string

    Returns:
        The parsed token; never raises
    """
    if isinstance(raw, int):
        if 0 <= raw <= 6:
            return DiatonicToken(index=raw)
        return UnrecognizedToken(text=str(raw))

    text = raw.strip()
    if text.startswith("V/"):
        return SecondaryDominantToken(target=text[2:])
    if text.startswith("vii°/"):
        return SecondaryDiminishedToken(target=text[5:])
    if text in _MODAL_LABELS:
        return ModalInterchangeToken(variant=_MODAL_LABELS[text])
    if text == NEAPOLITAN.label:
        return NeapolitanToken()
    return UnrecognizedToken(text=text)


def _tonic(layers: HarmonyLayers) -> Chord:
    return layers.tonic.with_layer(Layer.MAIN)


def _resolve_secondary_dominant(token: SecondaryDominantToken, layers: HarmonyLayers) -> Chord:
    key_root = layers.tonic.root
    index = numeral_index(token.target)

    if index is not None and 1 <= index <= len(layers.secondary_dominants):
        return layers.secondary_dominants[index - 1].with_layer(Layer.SECONDARY)
    if index == 0:
        return build_dominant(key_root, "V/I", 1, key_root).with_layer(Layer.SECONDARY)
    if token.target in _FLAT_DEGREES:
        offset, scale_degree = _FLAT_DEGREES[token.target]
        target = proper_spelling(PitchClass.parse(key_root).transpose(offset).spell(), key_root)
        chord = build_dominant(target, str(token), scale_degree, key_root)
        return chord.with_layer(Layer.SECONDARY)
    return _tonic(layers)


def _resolve_secondary_diminished(
    token: SecondaryDiminishedToken, layers: HarmonyLayers
) -> Chord:
    index = numeral_index(token.target)
    if index is not None and 1 <= index <= len(layers.secondary_diminished):
        return layers.secondary_diminished[index - 1].with_layer(Layer.SECONDARY_DIM)
    return _tonic(layers)


def resolve_token(token: DegreeToken, layers: HarmonyLayers) -> Chord:
    """
    Turn a parsed token into a concrete chord with its layer set.

    Targets the layers cannot supply (e.g. a degree missing from a short
    scale) fall back to the tonic.
    """
    if isinstance(token, DiatonicToken):
        if token.index < len(layers.main_chords):
            return layers.main_chords[token.index].with_layer(Layer.MAIN)
        return _tonic(layers)
    if isinstance(token, SecondaryDominantToken):
        return _resolve_secondary_dominant(token, layers)
    if isinstance(token, SecondaryDiminishedToken):
        return _resolve_secondary_diminished(token, layers)
    if isinstance(token, ModalInterchangeToken):
        return layers.modal_interchange[token.variant].with_layer(Layer.MODAL)
    if isinstance(token, NeapolitanToken):
        return layers.neapolitan[0].with_layer(Layer.NEAPOLITAN)
    return _tonic(layers)
