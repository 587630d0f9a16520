"""
Progression tools - MCP tools for generating, analyzing and exporting progressions.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import (
    Complexity,
    ErrorMessages,
    SuccessMessages,
)
from chuk_mcp_fretboard.core.chord import Chord
from chuk_mcp_fretboard.core.scale import Scale
from chuk_mcp_fretboard.export.midi import save_progression_midi
from chuk_mcp_fretboard.harmony.layers import get_progression_layers
from chuk_mcp_fretboard.harmony.tokens import UnrecognizedToken, parse_token, resolve_token
from chuk_mcp_fretboard.progression.analyzer import analyze_progression
from chuk_mcp_fretboard.progression.composer import ProgressionComposer, ensure_resolution
from chuk_mcp_fretboard.styles.loader import StyleLoader
from chuk_mcp_fretboard.tools.scales import scale_or_raise, scale_to_dict

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def parse_progression(labels: list[str], scale: Scale) -> list[Chord]:
    """
    Turn chord labels into chords of the scale's harmony layers.

    Labels are degree numerals ('IV', 'V/ii', 'bVII') or chord symbols
    ('Am', 'A7'). Applied dominants of tonic or flat degrees ('V/I',
    'V/bVI') are accepted too.

    Raises:
        ValueError: For an empty list or a label the layers can't supply
    """
    if not labels:
        raise ValueError(ErrorMessages.EMPTY_PROGRESSION)

    layers = get_progression_layers(scale)
    chords: list[Chord] = []
    for label in labels:
        chord = layers.find(label)
        if chord is None:
            token = parse_token(label)
            if isinstance(token, UnrecognizedToken):
                raise ValueError(ErrorMessages.UNKNOWN_CHORD.format(symbol=label, key=scale))
            chord = resolve_token(token, layers)
        chords.append(chord)
    return chords


def register_progression_tools(
    mcp: ChukMCPServer,
    composer: ProgressionComposer,
    style_loader: StyleLoader,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register progression tools with the MCP server.

    Args:
        mcp: The MCP server instance
        composer: The progression composer
        style_loader: The style loader
        output_dir: Directory for exported MIDI files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_styles() -> str:
        """
        List available progression styles.

        Returns:
            JSON string with style summaries

        Example:
            fretboard_list_styles()
        """
        try:
            styles = style_loader.list_styles()
            return json.dumps(
                {
                    "status": "success",
                    "styles": [s.model_dump(mode="json") for s in styles],
                    "count": len(styles),
                }
            )
        except Exception as e:
            logger.exception("Failed to list styles")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_styles"] = fretboard_list_styles

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_generate_progression(
        root: str,
        scale_type: str = "major",
        length: int = 8,
        complexity: str = "moderate",
        style: str = "pop",
    ) -> str:
        """
        Generate a chord progression in a key and style.

        The progression always opens on the tonic. Chromatic chords come
        from the scale's harmony layers; how many depends on complexity.

        Args:
            root: Root note
            scale_type: Scale key (needs seven notes)
            length: Number of chords
            complexity: "simple", "moderate" or "complex"
            style: Style key (see fretboard_list_styles); unknown styles use pop

        Returns:
            JSON string with chords and an analysis

        Example:
            fretboard_generate_progression(root="D", style="jazz", complexity="complex")
        """
        try:
            if complexity not in {c.value for c in Complexity}:
                raise ValueError(ErrorMessages.INVALID_COMPLEXITY.format(complexity=complexity))
            scale = scale_or_raise(root, scale_type)

            progression = composer.generate(scale, length, Complexity(complexity), style)
            if not progression:
                return json.dumps(
                    {
                        "status": "error",
                        "message": f"Cannot generate a {length}-chord progression in {scale}.",
                    }
                )

            analysis = analyze_progression(progression, scale)
            return json.dumps(
                {
                    "status": "success",
                    "scale": scale_to_dict(scale),
                    "progression": [c.to_dict() for c in progression],
                    "symbols": [c.symbol for c in progression],
                    "analysis": analysis.model_dump(mode="json"),
                    "message": SuccessMessages.PROGRESSION_GENERATED.format(
                        length=len(progression), style=style, root=scale.root
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to generate progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_generate_progression"] = fretboard_generate_progression

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_analyze_progression(
        root: str,
        chords: list[str],
        scale_type: str = "major",
    ) -> str:
        """
        Analyze a progression: harmonic function, voice leading and cadence.

        Args:
            root: Root note of the key
            chords: Degree labels or chord symbols, e.g. ["I", "V/vi", "vi", "IV"]
            scale_type: Scale key

        Returns:
            JSON string with the analysis

        Example:
            fretboard_analyze_progression(root="C", chords=["ii", "V", "I"])
        """
        try:
            scale = scale_or_raise(root, scale_type)
            progression = ensure_resolution(parse_progression(chords, scale))
            analysis = analyze_progression(progression, scale)
            return json.dumps(
                {
                    "status": "success",
                    "progression": [c.to_dict() for c in progression],
                    "analysis": analysis.model_dump(mode="json"),
                }
            )
        except Exception as e:
            logger.exception("Failed to analyze progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_analyze_progression"] = fretboard_analyze_progression

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_export_progression_midi(
        root: str,
        chords: list[str],
        scale_type: str = "major",
        output_name: str = "progression",
        tempo: int = 120,
        beats_per_chord: int = 4,
    ) -> str:
        """
        Export a progression as a MIDI file of block chords.

        Args:
            root: Root note of the key
            chords: Degree labels or chord symbols
            scale_type: Scale key
            output_name: Output filename (without .mid extension)
            tempo: Tempo in BPM
            beats_per_chord: Length of each chord in beats

        Returns:
            JSON string with the file path

        Example:
            fretboard_export_progression_midi(root="C", chords=["I", "vi", "IV", "V"])
        """
        try:
            scale = scale_or_raise(root, scale_type)
            progression = parse_progression(chords, scale)
            path = save_progression_midi(
                progression,
                output_dir / f"{output_name}.mid",
                tempo_bpm=tempo,
                beats_per_chord=beats_per_chord,
            )
            return json.dumps(
                {
                    "status": "success",
                    "path": str(path),
                    "symbols": [c.symbol for c in progression],
                    "message": SuccessMessages.MIDI_EXPORTED.format(
                        length=len(progression), path=path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_export_progression_midi"] = fretboard_export_progression_midi

    return tools
