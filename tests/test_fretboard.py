"""
Tests for fretboard mapping and the Session value object.
"""

import pytest
from pydantic import ValidationError

from chuk_mcp_fretboard.constants import TUNINGS, DisplayMode
from chuk_mcp_fretboard.core.fretboard import (
    STANDARD_TUNING,
    box_patterns,
    find_note_positions,
    get_fretboard_positions,
    note_at_fret,
    position_pattern,
    positions_in_range,
)
from chuk_mcp_fretboard.core.scale import Scale, generate_scale
from chuk_mcp_fretboard.models.session import Session


class TestFretboardPositions:
    """Tests for get_fretboard_positions."""

    def test_root_on_low_e_string(self, c_major: Scale) -> None:
        """C on the low E string (string 6) is fret 8 and flagged as root."""
        positions = get_fretboard_positions(c_major)
        root = [p for p in positions if p.string == 6 and p.fret == 8]
        assert len(root) == 1
        assert root[0].note == "C"
        assert root[0].is_root is True
        assert root[0].degree == "1"

    def test_non_root_not_flagged(self, c_major: Scale) -> None:
        """Open low E is a scale note but not the root."""
        positions = get_fretboard_positions(c_major)
        open_e = next(p for p in positions if p.string == 6 and p.fret == 0)
        assert open_e.note == "E"
        assert open_e.is_root is False
        assert open_e.interval == 4

    def test_count_full_neck(self, c_major: Scale) -> None:
        """Every open string of standard tuning is in C major: 15 positions per string."""
        assert len(get_fretboard_positions(c_major)) == 6 * 15

    def test_open_strings_only(self, c_major: Scale) -> None:
        """max_fret=0 scans open strings."""
        positions = get_fretboard_positions(c_major, max_fret=0)
        assert [p.fret for p in positions] == [0] * 6
        assert [p.string for p in positions] == [6, 5, 4, 3, 2, 1]

    def test_only_scale_notes(self) -> None:
        """Every position sounds a scale note."""
        scale = generate_scale("A", "minorPentatonic")
        positions = get_fretboard_positions(scale)
        assert {p.note for p in positions} == set(scale.notes)
        # The open B string is not in A minor pentatonic
        assert len([p for p in positions if p.string == 2]) == 10

    def test_alternate_tuning(self, c_major: Scale) -> None:
        """Drop D lowers the sixth string."""
        positions = get_fretboard_positions(c_major, TUNINGS["dropD"], max_fret=0)
        assert positions[0].string == 6
        assert positions[0].note == "D"

    def test_flat_spelling_follows_scale(self) -> None:
        """Positions use the scale's spelling."""
        scale = generate_scale("F", "major")
        notes = {p.note for p in get_fretboard_positions(scale, max_fret=12)}
        assert "Bb" in notes
        assert "A#" not in notes


class TestFretboardHelpers:
    """Tests for ranges, boxes and note lookup."""

    def test_note_at_fret(self) -> None:
        """Fret 5 of the low E is A."""
        assert note_at_fret("E", 5) == "A"
        assert note_at_fret("E", 12) == "E"

    def test_positions_in_range(self, c_major: Scale) -> None:
        """Range filter is inclusive."""
        positions = positions_in_range(c_major, 5, 8)
        assert positions
        assert all(5 <= p.fret <= 8 for p in positions)

    def test_box_patterns(self, c_major: Scale) -> None:
        """First box is anchored one fret below the low-string root."""
        boxes = box_patterns(c_major)
        assert boxes[0].start_fret == 7
        assert boxes[0].end_fret == 11
        assert all(7 <= p.fret <= 11 for p in boxes[0].positions)

    def test_position_pattern_fallback(self, c_major: Scale) -> None:
        """Out-of-range box numbers fall back to the first box."""
        assert position_pattern(c_major, 99) == position_pattern(c_major, 1)

    def test_find_note_positions(self) -> None:
        """Open E sounds on strings 6 and 1."""
        assert find_note_positions("E", max_fret=0) == [(6, 0), (1, 0)]
        assert find_note_positions("H") == []

    def test_standard_tuning(self) -> None:
        """Standard tuning low to high."""
        assert STANDARD_TUNING == ("E", "A", "D", "G", "B", "E")


class TestSession:
    """Tests for the Session value object."""

    def test_defaults(self) -> None:
        """Default session is C major in standard tuning."""
        session = Session()
        assert session.scale().notes == ("C", "D", "E", "F", "G", "A", "B")
        assert session.display_mode == DisplayMode.NOTES

    def test_with_root_returns_new_session(self) -> None:
        """Changing key yields a new session."""
        session = Session()
        g = session.with_root("G")
        assert session.root == "C"
        assert g.scale().notes[6] == "F#"

    def test_with_scale_type(self) -> None:
        """Changing scale type yields a new session."""
        session = Session().with_scale_type("minorPentatonic")
        assert len(session.scale()) == 5

    def test_invalid_values(self) -> None:
        """Unknown root, scale or tuning are rejected."""
        with pytest.raises(ValidationError):
            Session(root="H")
        with pytest.raises(ValidationError):
            Session(scale_type="nonexistent")
        with pytest.raises(ValidationError):
            Session(tuning="banjo")
        with pytest.raises(ValidationError):
            Session().with_root("H")

    def test_frozen(self) -> None:
        """Sessions are immutable."""
        with pytest.raises(ValidationError):
            Session().root = "D"  # type: ignore[misc]

    def test_positions(self) -> None:
        """Positions honour max_fret."""
        session = Session(max_fret=12)
        # Frets 0-11 cover each pitch once; fret 12 repeats the open string
        assert len(session.positions()) == 6 * 8

    def test_marker_labels(self) -> None:
        """Display mode decides the marker label."""
        session = Session(max_fret=8)
        root = next(p for p in session.positions() if p.is_root)
        assert session.marker_label(root) == "C"
        assert session.with_display_mode(DisplayMode.DEGREES).marker_label(root) == "1"
        assert session.with_display_mode(DisplayMode.INTERVALS).marker_label(root) == "P1"

    def test_fifth_on_low_e_not_root(self) -> None:
        """G at fret 3 of the low E is in C major but not the root."""
        g = next(p for p in Session(max_fret=12).positions() if p.string == 6 and p.fret == 3)
        assert g.note == "G"
        assert g.degree == "5"
        assert g.is_root is False
