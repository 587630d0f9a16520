"""
Extended harmony - chromatic layers around a scale and template tokens.
"""

from chuk_mcp_fretboard.harmony.layers import (
    HarmonyLayers,
    get_modal_interchange_chords,
    get_neapolitan_chords,
    get_progression_layers,
    get_secondary_diminished,
    get_secondary_dominants,
)
from chuk_mcp_fretboard.harmony.tokens import DegreeToken, parse_token, resolve_token

__all__ = [
    "DegreeToken",
    "HarmonyLayers",
    "get_modal_interchange_chords",
    "get_neapolitan_chords",
    "get_progression_layers",
    "get_secondary_diminished",
    "get_secondary_dominants",
    "parse_token",
    "resolve_token",
]
