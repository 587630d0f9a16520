"""
Constants and enums for the fretboard system.

No magic strings - use enums for constrained values.
"""

from enum import Enum


class ScaleCategory(str, Enum):
    """Grouping used by the scale catalog."""

    MAJOR = "major"
    MINOR = "minor"
    PENTATONIC = "pentatonic"
    BLUES = "blues"
    MODES = "modes"
    EXOTIC = "exotic"


class ChordType(str, Enum):
    """Structural provenance of a chord."""

    TRIAD = "triad"
    SEVENTH = "seventh"
    SECONDARY_DOMINANT = "secondary-dominant"
    MODAL_INTERCHANGE = "modal-interchange"
    NEAPOLITAN = "neapolitan"
    SECONDARY_DIMINISHED = "secondary-diminished"


class Layer(str, Enum):
    """
    Harmony layer a chord was drawn from during progression assembly.

    Main is diatonic, the rest are chromatic colour.
    """

    MAIN = "main"
    SECONDARY = "secondary"
    MODAL = "modal"
    NEAPOLITAN = "neapolitan"
    SECONDARY_DIM = "secondary-dim"


class Complexity(str, Enum):
    """How much chromatic harmony a generated progression may use."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class CadenceStyle(str, Enum):
    """A style's preferred approach to the final chord."""

    AUTHENTIC = "authentic"  # V-I
    PLAGAL = "plagal"  # IV-I
    II_V_I = "ii-V-I"
    BLUES = "blues"  # V-IV-I
    PHRYGIAN = "phrygian"  # bII-i
    LOOP = "loop"
    NONE = "none"


class Cadence(str, Enum):
    """Cadences recognised by the analyzer."""

    AUTHENTIC = "authentic"
    PLAGAL = "plagal"
    HALF = "half"
    DECEPTIVE = "deceptive"


class HarmonicFunction(str, Enum):
    """Harmonic function reported per chord by the analyzer."""

    TONIC = "Tonic"
    DOMINANT = "Dominant"
    SUBDOMINANT = "Subdominant"
    TONIC_PREDOMINANT = "Tonic/Predominant"
    CHROMATIC = "Chromatic"
    UNKNOWN = "Unknown"


class VoiceLeading(str, Enum):
    """Smoothness of a chord-to-chord transition, by shared tones."""

    DISJUNCT = "disjunct"  # no common tones
    SMOOTH = "smooth"  # one
    VERY_SMOOTH = "very smooth"  # two or more


class DisplayMode(str, Enum):
    """What a fretboard marker shows."""

    NOTES = "notes"
    DEGREES = "degrees"
    INTERVALS = "intervals"


# Roots that are spelled with flats
FLAT_KEYS: tuple[str, ...] = ("F", "Bb", "Eb", "Ab", "Db", "Gb")

# Open-string tunings, low to high
TUNINGS: dict[str, tuple[str, ...]] = {
    "standard": ("E", "A", "D", "G", "B", "E"),
    "dropD": ("D", "A", "D", "G", "B", "E"),
    "halfStepDown": ("D#", "G#", "C#", "F#", "A#", "D#"),
    "wholestepDown": ("D", "G", "C", "F", "A", "D"),
    "dropC": ("C", "G", "C", "F", "A", "D"),
    "openG": ("D", "G", "D", "G", "B", "D"),
    "openD": ("D", "A", "D", "F#", "A", "D"),
    "dadgad": ("D", "A", "D", "G", "A", "D"),
}

DEFAULT_TUNING = "standard"
DEFAULT_MAX_FRET = 24

# Phrase length used by the algorithmic composer
PHRASE_LENGTH = 4

# Probability of using a style template over the algorithmic walk
TEMPLATE_PROBABILITY = 0.7


class ErrorMessages:
    """Standardized error messages."""

    INVALID_NOTE = "Invalid note: '{note}'."
    SCALE_NOT_FOUND = "Scale type '{scale_type}' not found."
    TUNING_NOT_FOUND = "Tuning '{tuning}' not found."
    STYLE_NOT_FOUND = "Style '{style}' not found."
    INVALID_COMPLEXITY = "Invalid complexity: '{complexity}'. Expected simple, moderate or complex."
    EMPTY_PROGRESSION = "Progression is empty."
    UNKNOWN_CHORD = "Chord '{symbol}' is not part of the harmony layers for {key}."


class SuccessMessages:
    """Standardized success messages."""

    SCALE_GENERATED = "Generated {name} in {root}."
    PROGRESSION_GENERATED = "Generated {length}-chord {style} progression in {root}."
    MIDI_EXPORTED = "Exported {length} chords to {path}."
