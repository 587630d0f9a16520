"""
Tests for MCP tools.

Tests the MCP tool implementations for scales, fretboard positions,
harmony and progressions.
"""

import json
import random
from pathlib import Path

import pytest

from chuk_mcp_fretboard.constants import Layer
from chuk_mcp_fretboard.progression import ProgressionComposer
from chuk_mcp_fretboard.styles import StyleLoader
from chuk_mcp_fretboard.tools import (
    register_chord_tools,
    register_progression_tools,
    register_scale_tools,
)
from chuk_mcp_fretboard.tools.progressions import parse_progression


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def scale_tools() -> dict:
    return register_scale_tools(MockMCPServer("test"))


@pytest.fixture
def chord_tools() -> dict:
    return register_chord_tools(MockMCPServer("test"))


@pytest.fixture
def progression_tools(temp_dir: Path, styles_library_path: Path) -> dict:
    loader = StyleLoader(library_path=styles_library_path)
    composer = ProgressionComposer(loader, random.Random(11))
    return register_progression_tools(MockMCPServer("test"), composer, loader, temp_dir)


class TestRegistration:
    """Tools are registered under their names."""

    def test_tool_names(self, scale_tools: dict, chord_tools: dict, progression_tools: dict):
        """Every tool is returned and registered."""
        mcp = MockMCPServer("test")
        tools = register_scale_tools(mcp)
        assert set(tools) == set(mcp.tools)
        assert set(scale_tools) == {
            "fretboard_list_scales",
            "fretboard_generate_scale",
            "fretboard_get_positions",
            "fretboard_list_tunings",
        }
        assert set(chord_tools) == {"fretboard_harmonize", "fretboard_get_harmony_layers"}
        assert set(progression_tools) == {
            "fretboard_list_styles",
            "fretboard_generate_progression",
            "fretboard_analyze_progression",
            "fretboard_export_progression_midi",
        }


class TestScaleTools:
    """Tests for scale and fretboard tools."""

    @pytest.mark.asyncio
    async def test_list_scales(self, scale_tools: dict):
        """All 34 scales, grouped."""
        data = json.loads(await scale_tools["fretboard_list_scales"]())
        assert data["status"] == "success"
        assert data["count"] == 34
        assert len(data["categories"]["modes"]) == 5
        assert len(data["categories"]["exotic"]) == 21

    @pytest.mark.asyncio
    async def test_list_scales_filtered(self, scale_tools: dict):
        """Filter by category."""
        data = json.loads(await scale_tools["fretboard_list_scales"](category="pentatonic"))
        assert list(data["categories"]) == ["pentatonic"]
        assert data["count"] == 2

    @pytest.mark.asyncio
    async def test_list_scales_bad_category(self, scale_tools: dict):
        """Unknown category is an error."""
        data = json.loads(await scale_tools["fretboard_list_scales"](category="polka"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_generate_scale(self, scale_tools: dict):
        """Generate a scale."""
        data = json.loads(await scale_tools["fretboard_generate_scale"](root="F"))
        assert data["status"] == "success"
        assert data["scale"]["notes"] == ["F", "G", "A", "Bb", "C", "D", "E"]
        assert data["scale"]["category"] == "major"

    @pytest.mark.asyncio
    async def test_generate_scale_errors(self, scale_tools: dict):
        """Bad root and scale type give readable errors."""
        data = json.loads(await scale_tools["fretboard_generate_scale"](root="H"))
        assert data["status"] == "error"
        assert "H" in data["message"]
        data = json.loads(
            await scale_tools["fretboard_generate_scale"](root="C", scale_type="nonexistent")
        )
        assert data["status"] == "error"
        assert "nonexistent" in data["message"]

    @pytest.mark.asyncio
    async def test_get_positions(self, scale_tools: dict):
        """Positions carry labels for the display mode."""
        data = json.loads(
            await scale_tools["fretboard_get_positions"](
                root="C", max_fret=12, display_mode="degrees"
            )
        )
        assert data["status"] == "success"
        assert data["count"] == len(data["positions"]) == 6 * 8
        root = next(p for p in data["positions"] if p["is_root"])
        assert root["label"] == "1"

    @pytest.mark.asyncio
    async def test_get_positions_box(self, scale_tools: dict):
        """A box restricts the fret range."""
        data = json.loads(await scale_tools["fretboard_get_positions"](root="C", box=1))
        assert data["status"] == "success"
        start, end = data["box"]["start_fret"], data["box"]["end_fret"]
        assert all(start <= p["fret"] <= end for p in data["positions"])

    @pytest.mark.asyncio
    async def test_get_positions_errors(self, scale_tools: dict):
        """Unknown tuning or out-of-range frets fail."""
        data = json.loads(await scale_tools["fretboard_get_positions"](root="C", tuning="banjo"))
        assert data["status"] == "error"
        data = json.loads(await scale_tools["fretboard_get_positions"](root="C", max_fret=30))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_list_tunings(self, scale_tools: dict):
        """Eight tunings, low to high."""
        data = json.loads(await scale_tools["fretboard_list_tunings"]())
        assert data["count"] == 8
        assert data["tunings"]["standard"] == ["E", "A", "D", "G", "B", "E"]


class TestChordTools:
    """Tests for chord tools."""

    @pytest.mark.asyncio
    async def test_harmonize_triads(self, chord_tools: dict):
        """Triads come with common progressions."""
        data = json.loads(await chord_tools["fretboard_harmonize"](root="C"))
        assert data["status"] == "success"
        assert [c["symbol"] for c in data["chords"]] == ["C", "Dm", "Em", "F", "G", "Am", "Bdim"]
        assert len(data["common_progressions"]) == 6

    @pytest.mark.asyncio
    async def test_harmonize_sevenths(self, chord_tools: dict):
        """Sevenths have no progressions attached."""
        data = json.loads(await chord_tools["fretboard_harmonize"](root="C", sevenths=True))
        assert data["chords"][4]["symbol"] == "G7"
        assert "common_progressions" not in data

    @pytest.mark.asyncio
    async def test_harmony_layers(self, chord_tools: dict):
        """Every layer is listed."""
        data = json.loads(await chord_tools["fretboard_get_harmony_layers"](root="C"))
        assert data["status"] == "success"
        assert set(data["layers"]) == {layer.value for layer in Layer}
        assert data["layers"]["secondary"][0]["symbol"] == "A7"
        assert len(data["layers"]["modal"]) == 5


class TestProgressionTools:
    """Tests for progression tools."""

    @pytest.mark.asyncio
    async def test_list_styles(self, progression_tools: dict):
        """Nine library styles."""
        data = json.loads(await progression_tools["fretboard_list_styles"]())
        assert data["status"] == "success"
        assert data["count"] == 9
        assert data["styles"][0]["key"] == "blues"

    @pytest.mark.asyncio
    async def test_generate(self, progression_tools: dict):
        """Generate with analysis."""
        data = json.loads(
            await progression_tools["fretboard_generate_progression"](
                root="C", length=6, style="jazz"
            )
        )
        assert data["status"] == "success"
        assert len(data["progression"]) == 6
        assert data["symbols"][0] == "C"
        assert data["analysis"]["length"] == 6
        assert data["analysis"]["key_center"] == "C"

    @pytest.mark.asyncio
    async def test_generate_errors(self, progression_tools: dict):
        """Invalid complexity and short scales are errors."""
        data = json.loads(
            await progression_tools["fretboard_generate_progression"](
                root="C", complexity="insane"
            )
        )
        assert data["status"] == "error"
        assert "insane" in data["message"]

        data = json.loads(
            await progression_tools["fretboard_generate_progression"](
                root="A", scale_type="minorPentatonic"
            )
        )
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_analyze(self, progression_tools: dict):
        """ii-V-I is an authentic cadence."""
        data = json.loads(
            await progression_tools["fretboard_analyze_progression"](
                root="C", chords=["ii", "V", "I"]
            )
        )
        assert data["status"] == "success"
        assert data["analysis"]["cadence"] == "authentic"
        assert [c["symbol"] for c in data["progression"]] == ["Dm", "G", "C"]

    @pytest.mark.asyncio
    async def test_analyze_marks_unresolved(self, progression_tools: dict):
        """An applied chord not followed by its target is annotated."""
        data = json.loads(
            await progression_tools["fretboard_analyze_progression"](
                root="C", chords=["I", "V/ii", "IV"]
            )
        )
        assert data["progression"][1]["expects_resolution"] == "D"
        assert "Contains secondary dominants" in data["analysis"]["features"]

    @pytest.mark.asyncio
    async def test_analyze_errors(self, progression_tools: dict):
        """Empty and unknown chords are errors."""
        data = json.loads(
            await progression_tools["fretboard_analyze_progression"](root="C", chords=[])
        )
        assert data["status"] == "error"
        data = json.loads(
            await progression_tools["fretboard_analyze_progression"](root="C", chords=["Q7"])
        )
        assert data["status"] == "error"
        assert "Q7" in data["message"]

    @pytest.mark.asyncio
    async def test_export_midi(self, progression_tools: dict, temp_dir: Path):
        """Export writes a file in the output directory."""
        data = json.loads(
            await progression_tools["fretboard_export_progression_midi"](
                root="G", chords=["I", "vi", "IV", "V"], output_name="test"
            )
        )
        assert data["status"] == "success"
        assert data["symbols"] == ["G", "Em", "C", "D"]
        assert Path(data["path"]) == temp_dir / "test.mid"
        assert (temp_dir / "test.mid").exists()


class TestParseProgression:
    """Tests for chord label parsing."""

    def test_labels_and_symbols(self, c_major):
        """Numerals, applied labels and symbols."""
        chords = parse_progression(["I", "Am", "V/V", "bVII", "V/bVI"], c_major)
        assert [c.symbol for c in chords] == ["C", "Am", "D7", "A# (7)", "D#7"]
        assert chords[2].layer == Layer.SECONDARY

    def test_rejects_unknown(self, c_major):
        """Unknown labels raise ValueError."""
        with pytest.raises(ValueError):
            parse_progression(["I", "Zz"], c_major)
        with pytest.raises(ValueError):
            parse_progression([], c_major)
