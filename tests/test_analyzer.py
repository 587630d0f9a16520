"""
Tests for progression analysis.
"""

from chuk_mcp_fretboard.constants import (
    Cadence,
    Complexity,
    HarmonicFunction,
    Layer,
    VoiceLeading,
)
from chuk_mcp_fretboard.core.scale import Scale, generate_scale
from chuk_mcp_fretboard.harmony.layers import HarmonyLayers, get_progression_layers
from chuk_mcp_fretboard.progression import analyze_progression
from chuk_mcp_fretboard.progression.analyzer import (
    analyze_transition,
    detect_cadence,
    effective_layer,
    harmonic_function,
)


def main(layers: HarmonyLayers, *indexes: int) -> list:
    return [layers.main_chords[i].with_layer(Layer.MAIN) for i in indexes]


class TestHarmonicFunction:
    """Tests for functional labels."""

    def test_diatonic_functions(self, c_layers: HarmonyLayers) -> None:
        """Each diatonic degree has its role."""
        functions = [harmonic_function(c) for c in c_layers.main_chords]
        assert functions == [
            HarmonicFunction.TONIC,
            HarmonicFunction.SUBDOMINANT,
            HarmonicFunction.TONIC_PREDOMINANT,
            HarmonicFunction.SUBDOMINANT,
            HarmonicFunction.DOMINANT,
            HarmonicFunction.TONIC_PREDOMINANT,
            HarmonicFunction.DOMINANT,
        ]

    def test_chromatic_functions(self, c_layers: HarmonyLayers) -> None:
        """Applied chords are dominant; flat degrees are chromatic."""
        modal = {c.degree: c for c in c_layers.modal_interchange}
        assert harmonic_function(c_layers.secondary_dominants[0]) == HarmonicFunction.DOMINANT
        assert harmonic_function(c_layers.secondary_diminished[0]) == HarmonicFunction.DOMINANT
        assert harmonic_function(modal["bVII"]) == HarmonicFunction.CHROMATIC
        assert harmonic_function(modal["iv"]) == HarmonicFunction.SUBDOMINANT
        assert harmonic_function(c_layers.neapolitan[0]) == HarmonicFunction.CHROMATIC


class TestTransitions:
    """Tests for voice-leading classification."""

    def test_common_tone_counts(self, c_layers: HarmonyLayers) -> None:
        """C-Am shares two tones, C-G one, C-Dm none."""
        c, dm, _, _, g, am, _ = c_layers.main_chords
        assert analyze_transition(c, am).quality == VoiceLeading.VERY_SMOOTH
        assert analyze_transition(c, am).common_tones == 2
        assert analyze_transition(c, g).quality == VoiceLeading.SMOOTH
        assert analyze_transition(c, dm).quality == VoiceLeading.DISJUNCT


class TestCadences:
    """Tests for cadence detection."""

    def test_authentic(self, c_layers: HarmonyLayers) -> None:
        """V-I."""
        assert detect_cadence(main(c_layers, 1, 4, 0)) == Cadence.AUTHENTIC

    def test_plagal(self, c_layers: HarmonyLayers) -> None:
        """IV-I."""
        assert detect_cadence(main(c_layers, 0, 3, 0)) == Cadence.PLAGAL

    def test_deceptive(self, c_layers: HarmonyLayers) -> None:
        """V-vi."""
        assert detect_cadence(main(c_layers, 0, 4, 5)) == Cadence.DECEPTIVE

    def test_half(self, c_layers: HarmonyLayers) -> None:
        """Anything to V."""
        assert detect_cadence(main(c_layers, 0, 3, 4)) == Cadence.HALF

    def test_none(self, c_layers: HarmonyLayers) -> None:
        """No cadence for other endings or short input."""
        assert detect_cadence(main(c_layers, 0, 5)) is None
        assert detect_cadence(main(c_layers, 0)) is None
        assert detect_cadence([]) is None

    def test_chromatic_penultimate_is_not_a_cadence(self, c_layers: HarmonyLayers) -> None:
        """Both chords must be on the main layer."""
        g7_of_c = c_layers.secondary_dominants[2].with_layer(Layer.SECONDARY)
        assert detect_cadence([g7_of_c, *main(c_layers, 3)]) is None

    def test_minor_key_labels_are_not_folded(self) -> None:
        """A minor v-i is neither authentic nor half."""
        scale = generate_scale("A", "naturalMinor")
        layers = get_progression_layers(scale)
        progression = main(layers, 4, 0)
        assert [c.degree for c in progression] == ["v", "i"]
        assert detect_cadence(progression) is None
        assert detect_cadence(main(layers, 0, 4)) is None
        analysis = analyze_progression(progression, scale)
        assert "Perfect authentic cadence (V-I)" not in analysis.features


class TestAnalyzeProgression:
    """Tests for the full analysis."""

    def test_ii_v_i(self, c_major: Scale, c_layers: HarmonyLayers) -> None:
        """Diatonic ii-V-I."""
        analysis = analyze_progression(main(c_layers, 1, 4, 0), c_major)
        assert analysis.length == 3
        assert analysis.key_center == "C"
        assert analysis.complexity == Complexity.SIMPLE
        assert analysis.cadence == Cadence.AUTHENTIC
        assert [c.function for c in analysis.chords] == [
            HarmonicFunction.SUBDOMINANT,
            HarmonicFunction.DOMINANT,
            HarmonicFunction.TONIC,
        ]
        assert analysis.chords[0].transition is None
        assert [c.transition.quality for c in analysis.chords[1:]] == [
            VoiceLeading.SMOOTH,
            VoiceLeading.SMOOTH,
        ]
        assert analysis.features == ["Perfect authentic cadence (V-I)"]
        assert analysis.layer_counts[Layer.MAIN] == 3
        assert analysis.layer_counts[Layer.MODAL] == 0

    def test_secondary_dominant(self, c_major: Scale, c_layers: HarmonyLayers) -> None:
        """One applied chord makes a moderate progression."""
        e7 = c_layers.secondary_dominants[4].with_layer(Layer.SECONDARY)
        progression = [*main(c_layers, 0), e7, *main(c_layers, 5, 3, 4, 0)]
        analysis = analyze_progression(progression, c_major)
        assert analysis.complexity == Complexity.MODERATE
        assert analysis.layer_counts[Layer.SECONDARY] == 1
        assert analysis.features[0] == "Contains secondary dominants"
        assert analysis.chords[1].function == HarmonicFunction.DOMINANT
        assert analysis.chords[1].position == 2

    def test_complex(self, c_major: Scale, c_layers: HarmonyLayers) -> None:
        """Three or more chromatic chords is complex."""
        modal = c_layers.modal_interchange
        progression = [
            *main(c_layers, 0),
            modal[1].with_layer(Layer.MODAL),
            modal[3].with_layer(Layer.MODAL),
            c_layers.neapolitan[0].with_layer(Layer.NEAPOLITAN),
            *main(c_layers, 4, 0),
        ]
        analysis = analyze_progression(progression, c_major)
        assert analysis.complexity == Complexity.COMPLEX
        assert analysis.features == [
            "Uses modal interchange",
            "Includes Neapolitan harmony",
            "Perfect authentic cadence (V-I)",
        ]

    def test_unplaced_chords(self, c_major: Scale, c_layers: HarmonyLayers) -> None:
        """Chords without a layer are placed by their type."""
        progression = [c_layers.main_chords[0], c_layers.secondary_dominants[0]]
        assert progression[0].layer is None
        assert effective_layer(progression[0]) == Layer.MAIN
        analysis = analyze_progression(progression, c_major)
        assert analysis.layer_counts[Layer.MAIN] == 1
        assert analysis.layer_counts[Layer.SECONDARY] == 1

    def test_empty(self, c_major: Scale) -> None:
        """Empty progressions analyze to nothing."""
        analysis = analyze_progression([], c_major)
        assert analysis.length == 0
        assert analysis.chords == []
        assert analysis.cadence is None
        assert analysis.complexity == Complexity.SIMPLE
        assert analysis.features == []

    def test_input_not_modified(self, c_major: Scale, c_layers: HarmonyLayers) -> None:
        """Analysis is pure."""
        progression = main(c_layers, 0, 3, 4, 0)
        snapshot = list(progression)
        analyze_progression(progression, c_major)
        assert progression == snapshot

    def test_serializes(self, c_major: Scale, c_layers: HarmonyLayers) -> None:
        """Analysis dumps to JSON-friendly values."""
        data = analyze_progression(main(c_layers, 0, 3, 0), c_major).model_dump(mode="json")
        assert data["cadence"] == "plagal"
        assert data["chords"][1]["function"] == "Subdominant"


class TestDominantTonicInEveryKey:
    """V-I is recognised whatever the key."""

    def test_all_major_keys(self) -> None:
        """Perfect authentic cadence in all twelve major keys."""
        for root in ["C", "G", "D", "A", "E", "B", "F#", "Db", "Ab", "Eb", "Bb", "F"]:
            scale = generate_scale(root, "major")
            layers = get_progression_layers(scale)
            analysis = analyze_progression(main(layers, 4, 0), scale)
            assert "Perfect authentic cadence (V-I)" in analysis.features, root
