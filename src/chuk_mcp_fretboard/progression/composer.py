"""
Progression composer - style-aware chord progression generation.

Two strategies:
1. Template: pick a style template, resolve its tokens against the
   scale's harmony layers and tile it to the requested length, optionally
   approaching main chords through their secondary dominant.
2. Algorithmic: a phrase-structured walk over the harmony layers, with
   cadences at phrase boundaries and candidates scored for voice leading.

Both finish with a resolution pass that annotates chromatic chords left
hanging. All randomness comes from the injected random.Random.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from chuk_mcp_fretboard.constants import (
    PHRASE_LENGTH,
    TEMPLATE_PROBABILITY,
    CadenceStyle,
    ChordType,
    Complexity,
    Layer,
)
from chuk_mcp_fretboard.core.chord import Chord
from chuk_mcp_fretboard.core.pitch import PitchClass
from chuk_mcp_fretboard.core.scale import Scale
from chuk_mcp_fretboard.harmony.layers import (
    MIN_SECONDARY_NOTES,
    HarmonyLayers,
    get_progression_layers,
)
from chuk_mcp_fretboard.harmony.tokens import resolve_token
from chuk_mcp_fretboard.models.style import ProgressionTemplate, StyleConfig
from chuk_mcp_fretboard.progression.rules import (
    COMPLEXITY_WEIGHTS,
    FINAL_TONIC_CHANCE,
    PHRASE_DOMINANT_CHANCE,
    RULE_BREAK_CHANCE,
    TOP_CANDIDATES,
    follows_rules,
    transition_score,
)
from chuk_mcp_fretboard.styles.loader import StyleLoader

logger = logging.getLogger(__name__)

NEAPOLITAN_RESOLUTION = "V or I"

_SUPERTONIC, _SUBDOMINANT, _DOMINANT, _SUBMEDIANT = 1, 3, 4, 5

_APPLIED_TYPES = (ChordType.SECONDARY_DOMINANT, ChordType.SECONDARY_DIMINISHED)


def _coerce_complexity(complexity: Complexity | str) -> Complexity:
    try:
        return Complexity(complexity)
    except ValueError:
        logger.warning("Unknown complexity %r, using moderate", complexity)
        return Complexity.MODERATE


def _main(layers: HarmonyLayers, index: int) -> Chord:
    return layers.main_chords[index].with_layer(Layer.MAIN)


def _leads_into(previous: Chord, chord: Chord) -> bool:
    """Whether `previous` already resolves to the root of `chord`."""
    if previous.resolves_to is None:
        return False
    return PitchClass.lookup(previous.resolves_to) == chord.root_pitch


def _resolution_of(chord: Chord, layers: HarmonyLayers) -> Chord | None:
    """The main chord an applied chord resolves to, if the key has one."""
    if chord.resolves_to is None:
        return None
    target = PitchClass.lookup(chord.resolves_to)
    for candidate in layers.main_chords:
        if candidate.root_pitch == target:
            return candidate.with_layer(Layer.MAIN)
    return None


def ensure_resolution(progression: list[Chord]) -> list[Chord]:
    """
    Annotate chromatic chords that don't resolve as expected.

    - Secondary dominants and diminished chords not followed by their target
      get `expects_resolution` set to the target note.
    - A Neapolitan followed by anything other than V or I gets "V or I".

    The chord sequence itself is never changed.
    """
    resolved: list[Chord] = []
    for i, chord in enumerate(progression):
        following = progression[i + 1] if i + 1 < len(progression) else None

        if chord.chord_type in _APPLIED_TYPES and chord.resolves_to:
            target = PitchClass.lookup(chord.resolves_to)
            if following is None or following.root_pitch != target:
                chord = replace(chord, expects_resolution=chord.resolves_to)
        elif chord.chord_type == ChordType.NEAPOLITAN:
            if following is not None and following.scale_degree not in (1, 5):
                chord = replace(chord, expects_resolution=NEAPOLITAN_RESOLUTION)

        resolved.append(chord)
    return resolved


class ProgressionComposer:
    """
    Generates chord progressions for a scale in a genre style.

    Args:
        styles: Style catalog (defaults to the built-in library)
        rng: Random source; pass a seeded instance for reproducible output
    """

    def __init__(
        self,
        styles: StyleLoader | None = None,
        rng: random.Random | None = None,
    ):
        self.styles = styles or StyleLoader()
        self.rng = rng or random.Random()

    def generate(
        self,
        scale: Scale,
        length: int = 8,
        complexity: Complexity | str = Complexity.MODERATE,
        style: str = "pop",
    ) -> list[Chord]:
        """
        Generate a progression.

        Args:
            scale: Key to compose in; must have at least seven notes
            length: Number of chords
            complexity: How much chromatic harmony to use
            style: Style key; unknown styles fall back to pop

        Returns:
            Exactly `length` chords opening on the tonic, or [] when the
            scale is too small or the length is not positive
        """
        if length <= 0:
            logger.warning("Progression length must be positive, got %d", length)
            return []
        if len(scale.notes) < MIN_SECONDARY_NOTES:
            logger.warning("Cannot compose in %s: needs %d notes", scale, MIN_SECONDARY_NOTES)
            return []

        level = _coerce_complexity(complexity)
        config = self.styles.get_style_or_default(style)
        layers = get_progression_layers(scale)

        if config.templates and self.rng.random() < TEMPLATE_PROBABILITY:
            progression = self._from_template(layers, length, level, config)
        else:
            progression = self._algorithmic(layers, length, level, config)

        logger.debug("Generated %s progression: %s", config.key, [str(c) for c in progression])
        return ensure_resolution(progression)

    # ------------------------------------------------------------------
    # Template strategy
    # ------------------------------------------------------------------

    def _from_template(
        self,
        layers: HarmonyLayers,
        length: int,
        complexity: Complexity,
        config: StyleConfig,
    ) -> list[Chord]:
        candidates = config.templates_fitting(length)
        if not candidates:
            return self._algorithmic(layers, length, complexity, config)

        template = self.rng.choice(candidates)
        base = self._template_chords(template, layers)
        chance = config.chromatic_chance_for(complexity)

        progression: list[Chord] = []
        while len(progression) < length:
            for chord in base:
                if len(progression) >= length:
                    break
                approach = self._applied_dominant(chord, layers)
                if (
                    approach is not None
                    and progression
                    and not _leads_into(progression[-1], chord)
                    and len(progression) + 2 <= length
                    and self.rng.random() < chance
                ):
                    progression.append(approach)
                progression.append(chord)

        if length > 1 and not progression[-1].same_harmony(layers.tonic):
            progression[-1] = self._final_chord(layers)
        return progression

    def _template_chords(self, template: ProgressionTemplate, layers: HarmonyLayers) -> list[Chord]:
        """Resolve a template, rotated so it opens on the tonic."""
        tokens = list(template.tokens)
        start = template.first_tonic_index
        if start is not None:
            tokens = tokens[start:] + tokens[:start]

        chords = [resolve_token(token, layers) for token in tokens]
        if start is None:
            chords[0] = _main(layers, 0)
        return chords

    @staticmethod
    def _applied_dominant(chord: Chord, layers: HarmonyLayers) -> Chord | None:
        """Secondary dominant resolving to a non-tonic main chord."""
        if chord.layer != Layer.MAIN or chord.scale_degree <= 1:
            return None
        for dominant in layers.secondary_dominants:
            target = PitchClass.lookup(dominant.resolves_to or "")
            if target == chord.root_pitch:
                return dominant.with_layer(Layer.SECONDARY)
        return None

    # ------------------------------------------------------------------
    # Algorithmic strategy
    # ------------------------------------------------------------------

    def _algorithmic(
        self,
        layers: HarmonyLayers,
        length: int,
        complexity: Complexity,
        config: StyleConfig,
    ) -> list[Chord]:
        progression = [_main(layers, 0)]

        for i in range(1, length):
            previous = progression[-1]
            is_phrase_end = i % PHRASE_LENGTH == PHRASE_LENGTH - 1
            in_last_phrase = i // PHRASE_LENGTH == (length - 1) // PHRASE_LENGTH

            if i == length - 1:
                chord = self._final_chord(layers)
            elif i == length - 2:
                chord = self._penultimate_chord(previous, layers, config.preferred_cadence)
            elif is_phrase_end and not in_last_phrase:
                chord = self._phrase_end_chord(layers)
            else:
                chord = self._next_chord(previous, layers, complexity, config)

            if previous.chord_type in _APPLIED_TYPES:
                chord = _resolution_of(previous, layers) or chord

            progression.append(chord)

        return progression

    def _final_chord(self, layers: HarmonyLayers) -> Chord:
        if self.rng.random() < FINAL_TONIC_CHANCE:
            return _main(layers, 0)
        return _main(layers, _SUBMEDIANT)

    @staticmethod
    def _penultimate_chord(previous: Chord, layers: HarmonyLayers, cadence: CadenceStyle) -> Chord:
        if cadence in (CadenceStyle.PLAGAL, CadenceStyle.BLUES):
            return _main(layers, _SUBDOMINANT)
        if cadence == CadenceStyle.II_V_I:
            if previous.layer == Layer.MAIN and previous.scale_degree == 2:
                return _main(layers, _DOMINANT)
            return _main(layers, _SUPERTONIC)
        if cadence == CadenceStyle.PHRYGIAN:
            return layers.neapolitan[0].with_layer(Layer.NEAPOLITAN)
        return _main(layers, _DOMINANT)

    def _phrase_end_chord(self, layers: HarmonyLayers) -> Chord:
        if self.rng.random() < PHRASE_DOMINANT_CHANCE:
            return _main(layers, _DOMINANT)
        return _main(layers, _SUBMEDIANT)

    def _draw_layer(self, complexity: Complexity) -> Layer:
        roll = self.rng.random()
        cumulative = 0.0
        for layer, weight in COMPLEXITY_WEIGHTS[complexity].items():
            cumulative += weight
            if roll < cumulative:
                return layer
        return Layer.MAIN

    def _next_chord(
        self,
        current: Chord,
        layers: HarmonyLayers,
        complexity: Complexity,
        config: StyleConfig,
    ) -> Chord:
        """Weighted layer draw, rule filtering, then a pick among the best-scored."""
        layer = self._draw_layer(complexity)

        valid = [
            chord
            for chord in layers.chords_for(layer)
            if not chord.same_harmony(current)
            and (
                layer != Layer.MAIN
                or follows_rules(current, chord)
                or self.rng.random() < RULE_BREAK_CHANCE
            )
        ]
        if not valid:
            layer = Layer.MAIN
            valid = [c for c in layers.main_chords if not c.same_harmony(current)]

        scored = sorted(
            valid,
            key=lambda c: transition_score(current, c, config.degree_bonus(c.degree)),
            reverse=True,
        )
        return self.rng.choice(scored[:TOP_CANDIDATES]).with_layer(layer)


def generate_progression(
    scale: Scale,
    length: int = 8,
    complexity: Complexity | str = Complexity.MODERATE,
    style: str = "pop",
    rng: random.Random | None = None,
) -> list[Chord]:
    """Generate a progression with the built-in style library."""
    return ProgressionComposer(rng=rng).generate(scale, length, complexity, style)
