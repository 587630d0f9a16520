"""
Tests for chord primitives and scale harmonization.
"""

import pytest

from chuk_mcp_fretboard.constants import ChordType, Layer
from chuk_mcp_fretboard.core.chord import (
    Chord,
    ChordQuality,
    analyze_chord_tone,
    chord_symbol,
    chords_containing_note,
    classify_chord,
    count_common_tones,
    extend_chord,
    get_common_progressions,
    get_substitutions,
    harmonize_seventh_chords,
    harmonize_triads,
    roman_numeral,
)
from chuk_mcp_fretboard.core.scale import Scale, generate_scale


class TestChordQuality:
    """Tests for interval-fingerprint classification."""

    def test_triads(self) -> None:
        """The four triad qualities."""
        assert classify_chord(("C", "E", "G")) == ChordQuality.MAJOR
        assert classify_chord(("A", "C", "E")) == ChordQuality.MINOR
        assert classify_chord(("B", "D", "F")) == ChordQuality.DIMINISHED
        assert classify_chord(("C", "E", "G#")) == ChordQuality.AUGMENTED

    def test_sevenths(self) -> None:
        """Seventh qualities."""
        assert classify_chord(("G", "B", "D", "F")) == ChordQuality.DOMINANT_7
        assert classify_chord(("B", "D", "F", "A")) == ChordQuality.HALF_DIMINISHED_7
        assert classify_chord(("C#", "E", "G", "Bb")) == ChordQuality.DIMINISHED_7
        assert classify_chord(("A", "C", "E", "G#")) == ChordQuality.MINOR_MAJOR_7

    def test_unknown(self) -> None:
        """Unmatched fingerprints and sizes are UNKNOWN."""
        assert classify_chord(("C", "D", "E")) == ChordQuality.UNKNOWN
        assert classify_chord(("C", "E")) == ChordQuality.UNKNOWN
        assert classify_chord(("C", "E", "G", "B", "D")) == ChordQuality.UNKNOWN

    def test_suffix_and_symbol(self) -> None:
        """Symbols append the quality suffix."""
        assert chord_symbol("C", ChordQuality.MAJOR) == "C"
        assert chord_symbol("B", ChordQuality.HALF_DIMINISHED_7) == "Bm7b5"
        assert chord_symbol("C", ChordQuality.UNKNOWN) == "C"

    def test_roman_numeral_case(self) -> None:
        """Minor and diminished numerals are lowercase."""
        assert roman_numeral(1, ChordQuality.MAJOR) == "I"
        assert roman_numeral(2, ChordQuality.MINOR) == "ii"
        assert roman_numeral(7, ChordQuality.DIMINISHED) == "vii"
        assert roman_numeral(5, ChordQuality.DOMINANT_7) == "V"
        assert roman_numeral(8, ChordQuality.MAJOR) == ""


class TestHarmonize:
    """Tests for triad and seventh harmonization."""

    def test_c_major_triads(self, c_major: Scale) -> None:
        """C major triads."""
        triads = harmonize_triads(c_major)
        assert [c.quality for c in triads] == [
            ChordQuality.MAJOR,
            ChordQuality.MINOR,
            ChordQuality.MINOR,
            ChordQuality.MAJOR,
            ChordQuality.MAJOR,
            ChordQuality.MINOR,
            ChordQuality.DIMINISHED,
        ]
        assert [c.symbol for c in triads] == ["C", "Dm", "Em", "F", "G", "Am", "Bdim"]
        assert [c.degree for c in triads] == ["I", "ii", "iii", "IV", "V", "vi", "vii"]
        assert triads[4].notes == ("G", "B", "D")
        assert all(c.chord_type == ChordType.TRIAD for c in triads)
        assert all(c.layer is None for c in triads)

    def test_c_major_sevenths(self, c_major: Scale) -> None:
        """C major seventh chords."""
        sevenths = harmonize_seventh_chords(c_major)
        assert [c.symbol for c in sevenths] == [
            "Cmaj7",
            "Dm7",
            "Em7",
            "Fmaj7",
            "G7",
            "Am7",
            "Bm7b5",
        ]
        assert sevenths[4].quality == ChordQuality.DOMINANT_7
        assert sevenths[6].quality == ChordQuality.HALF_DIMINISHED_7

    def test_flat_key_triads(self) -> None:
        """Triads follow the scale's spelling."""
        triads = harmonize_triads(generate_scale("F", "major"))
        assert triads[3].symbol == "Bb"
        assert triads[3].notes == ("Bb", "D", "F")

    def test_pentatonic_stacks(self) -> None:
        """Non-heptatonic scales stack inside their own notes."""
        triads = harmonize_triads(generate_scale("C", "majorPentatonic"))
        assert len(triads) == 5
        assert triads[0].notes == ("C", "E", "A")
        assert triads[0].quality == ChordQuality.UNKNOWN

    def test_invalid_scale_raises(self) -> None:
        """A missing scale is a programming error."""
        with pytest.raises(ValueError):
            harmonize_triads(None)  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            harmonize_seventh_chords("C major")  # type: ignore[arg-type]


class TestChord:
    """Tests for the Chord value object."""

    def test_quality_is_derived(self, c_major: Scale) -> None:
        """Quality follows the notes."""
        chord = harmonize_triads(c_major)[0]
        assert chord.quality == ChordQuality.MAJOR
        assert chord.pitch_classes == frozenset({0, 4, 7})

    def test_with_layer(self, c_major: Scale) -> None:
        """with_layer returns a copy."""
        chord = harmonize_triads(c_major)[0]
        placed = chord.with_layer(Layer.MAIN)
        assert placed.layer == Layer.MAIN
        assert chord.layer is None
        assert placed.same_harmony(chord)

    def test_to_dict(self, c_major: Scale) -> None:
        """Serializable form carries quality and type."""
        data = harmonize_triads(c_major)[5].to_dict()
        assert data["symbol"] == "Am"
        assert data["quality"] == "minor"
        assert data["type"] == "triad"
        assert "layer" not in data

    def test_common_tones(self) -> None:
        """Common tones are counted by pitch class."""
        assert count_common_tones(["C", "E", "G"], ["A", "C", "E"]) == 2
        assert count_common_tones(["C#"], ["Db"]) == 1
        assert count_common_tones(["C", "E", "G"], ["D", "F", "A"]) == 0

    def test_str(self) -> None:
        """String form is the symbol."""
        chord = Chord("C", ("C", "E", "G"), "C", "I", 1, ChordType.TRIAD)
        assert str(chord) == "C"


class TestChordExtras:
    """Tests for progressions, substitutions, extensions and chord tones."""

    def test_common_progressions(self, c_major: Scale) -> None:
        """Named diatonic progressions."""
        progressions = get_common_progressions(c_major)
        assert len(progressions) == 6
        pop = next(p for p in progressions if p.name == "I-V-vi-IV")
        assert [c.symbol for c in pop.chords] == ["C", "G", "Am", "F"]
        assert get_common_progressions(generate_scale("C", "majorPentatonic")) == []

    def test_substitutions(self, c_major: Scale) -> None:
        """Em and Am share two tones with C."""
        c_chord = harmonize_triads(c_major)[0]
        subs = get_substitutions(c_chord, c_major)
        assert sorted(s.chord.symbol for s in subs) == ["Am", "Em"]
        assert all(s.kind == "common tone" for s in subs)

    def test_extend_chord(self, c_major: Scale) -> None:
        """Only 9, 11 and 13 are added."""
        chord = extend_chord(harmonize_triads(c_major)[0], [9, 2])
        assert chord.extensions == (9,)
        assert chord.all_notes == ("C", "E", "G", "D")

    def test_chord_tone(self, c_major: Scale) -> None:
        """G is the fifth of C."""
        chord = harmonize_triads(c_major)[0]
        tone = analyze_chord_tone("G", chord)
        assert tone is not None
        assert tone.tone_name == "fifth"
        assert tone.position == 3
        assert analyze_chord_tone("F", chord) is None

    def test_chords_containing_note(self, c_major: Scale) -> None:
        """C is in C, F and Am."""
        found = chords_containing_note("C", harmonize_triads(c_major))
        assert [c.symbol for c in found] == ["C", "F", "Am"]
