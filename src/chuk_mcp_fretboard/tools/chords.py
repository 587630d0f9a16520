"""
Chord tools - MCP tools for harmonizing scales and extended harmony.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import Layer
from chuk_mcp_fretboard.core.chord import (
    get_common_progressions,
    harmonize_seventh_chords,
    harmonize_triads,
)
from chuk_mcp_fretboard.harmony.layers import get_progression_layers
from chuk_mcp_fretboard.tools.scales import scale_or_raise, scale_to_dict

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_chord_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register chord tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_harmonize(
        root: str,
        scale_type: str = "major",
        sevenths: bool = False,
    ) -> str:
        """
        Build a chord on every degree of a scale by stacking scale thirds.

        Args:
            root: Root note
            scale_type: Scale key
            sevenths: Four-note seventh chords instead of triads

        Returns:
            JSON string with chords and, for triads, common progressions

        Example:
            fretboard_harmonize(root="C", scale_type="major", sevenths=True)
        """
        try:
            scale = scale_or_raise(root, scale_type)
            chords = harmonize_seventh_chords(scale) if sevenths else harmonize_triads(scale)

            result: dict[str, Any] = {
                "status": "success",
                "scale": scale_to_dict(scale),
                "chords": [c.to_dict() for c in chords],
                "count": len(chords),
            }
            if not sevenths:
                result["common_progressions"] = [
                    {
                        "name": p.name,
                        "description": p.description,
                        "chords": [c.symbol for c in p.chords],
                    }
                    for p in get_common_progressions(scale)
                ]
            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to harmonize scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_harmonize"] = fretboard_harmonize

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_get_harmony_layers(root: str, scale_type: str = "major") -> str:
        """
        Get every harmony layer for a scale.

        Layers: main (diatonic triads), secondary (V7 of each degree),
        modal (borrowed from the parallel minor), neapolitan (bII) and
        secondary-dim (leading-tone dim7 of each degree).

        Args:
            root: Root note
            scale_type: Scale key

        Returns:
            JSON string with chords per layer

        Example:
            fretboard_get_harmony_layers(root="G")
        """
        try:
            scale = scale_or_raise(root, scale_type)
            layers = get_progression_layers(scale)
            return json.dumps(
                {
                    "status": "success",
                    "scale": scale_to_dict(scale),
                    "layers": {
                        layer.value: [c.to_dict() for c in layers.chords_for(layer)]
                        for layer in Layer
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to build harmony layers")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_get_harmony_layers"] = fretboard_get_harmony_layers

    return tools
