"""
MCP tool implementations.

Tools are organized by domain:
- scales - Scale catalog, generation and fretboard positions
- chords - Harmonization and extended harmony layers
- progressions - Style-aware generation, analysis and MIDI export
"""

from chuk_mcp_fretboard.tools.chords import register_chord_tools
from chuk_mcp_fretboard.tools.progressions import register_progression_tools
from chuk_mcp_fretboard.tools.scales import register_scale_tools

__all__ = [
    "register_chord_tools",
    "register_progression_tools",
    "register_scale_tools",
]
