"""
Functional harmony rules and scoring weights for the algorithmic composer.

Rules are keyed by the case-folded numeral of the current chord, so minor
keys ('i', 'iv', 'v') share the major-key entries. The one exception is the
borrowed minor iv, which keeps its own entry and is only consulted for
chords drawn from the modal layer.
"""

from __future__ import annotations

from chuk_mcp_fretboard.constants import Complexity, Layer
from chuk_mcp_fretboard.core.chord import Chord, count_common_tones
from chuk_mcp_fretboard.harmony.tokens import normalize_numeral

# Layer draw probabilities per complexity, in draw order
COMPLEXITY_WEIGHTS: dict[Complexity, dict[Layer, float]] = {
    Complexity.SIMPLE: {
        Layer.MAIN: 0.9,
        Layer.SECONDARY: 0.07,
        Layer.MODAL: 0.03,
        Layer.NEAPOLITAN: 0.0,
        Layer.SECONDARY_DIM: 0.0,
    },
    Complexity.MODERATE: {
        Layer.MAIN: 0.65,
        Layer.SECONDARY: 0.18,
        Layer.MODAL: 0.12,
        Layer.NEAPOLITAN: 0.03,
        Layer.SECONDARY_DIM: 0.02,
    },
    Complexity.COMPLEX: {
        Layer.MAIN: 0.4,
        Layer.SECONDARY: 0.25,
        Layer.MODAL: 0.2,
        Layer.NEAPOLITAN: 0.08,
        Layer.SECONDARY_DIM: 0.07,
    },
}

# Current numeral -> numerals a main chord may move to
NEXT_DEGREES: dict[str, tuple[str, ...]] = {
    "I": ("V", "VII", "IV", "II", "VI", "bVII", "bVI", "bII"),
    "VI": ("I", "V", "IV", "III", "bVII"),
    "III": ("I", "VI", "IV", "V"),
    "IV": ("I", "VI", "II", "III", "bVII"),
    "II": ("I", "VI", "IV", "III"),
    "V": ("IV", "II", "I", "VI", "bII", "bVI"),
    "VII": ("IV", "II", "VI"),
    "bVII": ("I", "IV", "VI", "bVI"),
    "bVI": ("I", "V", "bVII", "IV"),
    "bIII": ("I", "bVI", "bVII"),
    "iv": ("I", "V", "bVI", "bVII"),
    "bII": ("IV", "II", "I", "VI"),
}

# Probability of accepting a main chord the rules don't allow
RULE_BREAK_CHANCE = 0.2

COMMON_TONE_WEIGHT = 10
FOURTH_FIFTH_BONUS = 15
STEP_BONUS = 10
STATIC_BASS_PENALTY = -20

# Candidates kept for the final uniform pick
TOP_CANDIDATES = 3

FINAL_TONIC_CHANCE = 0.9
PHRASE_DOMINANT_CHANCE = 0.7


def rule_key(chord: Chord) -> str:
    """Lookup key into NEXT_DEGREES for a chord."""
    if chord.layer == Layer.MODAL and chord.degree == "iv":
        return "iv"
    return normalize_numeral(chord.degree)


def allowed_next(chord: Chord) -> tuple[str, ...] | None:
    """Numerals a main chord may follow `chord` with; None when unconstrained."""
    return NEXT_DEGREES.get(rule_key(chord))


def follows_rules(current: Chord, candidate: Chord) -> bool:
    """Whether a main-layer candidate is an allowed successor of `current`."""
    allowed = allowed_next(current)
    if allowed is None:
        return True
    return normalize_numeral(candidate.degree) in allowed


def bass_motion_score(current: Chord, candidate: Chord) -> int:
    """
    Score the root movement by interval class.

    A fourth or fifth either way scores best, a step is good and a static
    bass is penalized.
    """
    distance = current.root_pitch.interval_to(candidate.root_pitch)
    interval_class = min(distance, 12 - distance)
    if interval_class == 5:
        return FOURTH_FIFTH_BONUS
    if interval_class in (1, 2):
        return STEP_BONUS
    if interval_class == 0:
        return STATIC_BASS_PENALTY
    return 0


def transition_score(current: Chord, candidate: Chord, degree_bonus: int = 0) -> int:
    """Voice-leading score for moving from `current` to `candidate`."""
    score = count_common_tones(current.notes, candidate.notes) * COMMON_TONE_WEIGHT
    score += bass_motion_score(current, candidate)
    return score + degree_bonus
