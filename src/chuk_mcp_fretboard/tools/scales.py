"""
Scale tools - MCP tools for the scale catalog and fretboard positions.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import (
    TUNINGS,
    DisplayMode,
    ErrorMessages,
    ScaleCategory,
    SuccessMessages,
)
from chuk_mcp_fretboard.core.fretboard import FretPosition, position_pattern
from chuk_mcp_fretboard.core.pitch import is_valid_note
from chuk_mcp_fretboard.core.scale import (
    SCALE_PATTERNS,
    Scale,
    generate_scale,
    get_scales_by_category,
)
from chuk_mcp_fretboard.models.session import Session

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def scale_or_raise(root: str, scale_type: str) -> Scale:
    """Build a scale for a tool call, raising ValueError with a readable message."""
    if not is_valid_note(root):
        raise ValueError(ErrorMessages.INVALID_NOTE.format(note=root))
    if scale_type not in SCALE_PATTERNS:
        raise ValueError(ErrorMessages.SCALE_NOT_FOUND.format(scale_type=scale_type))
    scale = generate_scale(root, scale_type)
    if scale is None:
        raise ValueError(ErrorMessages.INVALID_NOTE.format(note=root))
    return scale


def scale_to_dict(scale: Scale) -> dict[str, Any]:
    """JSON-serializable scale summary."""
    return {
        "root": scale.root,
        "type": scale.scale_type,
        "name": scale.name,
        "category": scale.category.value,
        "formula": scale.formula,
        "notes": list(scale.notes),
        "degrees": list(scale.degrees),
        "intervals": list(scale.intervals),
    }


def _position_to_dict(position: FretPosition, session: Session) -> dict[str, Any]:
    return {
        "string": position.string,
        "fret": position.fret,
        "note": position.note,
        "degree": position.degree,
        "interval": position.interval,
        "is_root": position.is_root,
        "label": session.marker_label(position),
    }


def register_scale_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register scale and fretboard tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_scales(category: str | None = None) -> str:
        """
        List available scales grouped by category.

        Args:
            category: Optional filter (major, minor, pentatonic, blues, modes, exotic)

        Returns:
            JSON string with scales per category

        Example:
            fretboard_list_scales(category="modes")
        """
        try:
            grouped = get_scales_by_category()
            if category is not None:
                wanted = ScaleCategory(category)
                grouped = {wanted: grouped.get(wanted, [])}

            return json.dumps(
                {
                    "status": "success",
                    "categories": {
                        cat.value: [
                            {"key": p.key, "name": p.name, "formula": p.formula}
                            for p in patterns
                        ]
                        for cat, patterns in grouped.items()
                    },
                    "count": sum(len(p) for p in grouped.values()),
                }
            )
        except Exception as e:
            logger.exception("Failed to list scales")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_scales"] = fretboard_list_scales

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_generate_scale(root: str, scale_type: str = "major") -> str:
        """
        Generate a scale on a root note.

        Args:
            root: Root note (e.g. "C", "F#", "Bb")
            scale_type: Scale key (e.g. "major", "dorian", "blues")

        Returns:
            JSON string with notes, degrees, intervals and formula

        Example:
            fretboard_generate_scale(root="A", scale_type="minorPentatonic")
        """
        try:
            scale = scale_or_raise(root, scale_type)
            return json.dumps(
                {
                    "status": "success",
                    "scale": scale_to_dict(scale),
                    "message": SuccessMessages.SCALE_GENERATED.format(
                        name=scale.name, root=scale.root
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to generate scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_generate_scale"] = fretboard_generate_scale

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_get_positions(
        root: str,
        scale_type: str = "major",
        tuning: str = "standard",
        max_fret: int = 24,
        display_mode: str = "notes",
        box: int | None = None,
    ) -> str:
        """
        Map a scale onto the fretboard.

        Strings are numbered guitar-style: 1 is the highest-pitched string.

        Args:
            root: Root note
            scale_type: Scale key
            tuning: Tuning name (see fretboard_list_tunings)
            max_fret: Highest fret to include (0-24)
            display_mode: Marker label - "notes", "degrees" or "intervals"
            box: Optional 1-based box position to restrict to

        Returns:
            JSON string with positions

        Example:
            fretboard_get_positions(root="E", scale_type="minorPentatonic", box=1)
        """
        try:
            if tuning not in TUNINGS:
                raise ValueError(ErrorMessages.TUNING_NOT_FOUND.format(tuning=tuning))
            scale_or_raise(root, scale_type)
            session = Session(
                root=root,
                scale_type=scale_type,
                tuning=tuning,
                max_fret=max_fret,
                display_mode=DisplayMode(display_mode),
            )

            result: dict[str, Any] = {"status": "success", "scale": scale_to_dict(session.scale())}
            if box is None:
                positions = session.positions()
            else:
                pattern = position_pattern(session.scale(), box, TUNINGS[tuning])
                positions = list(pattern.positions) if pattern else []
                if pattern:
                    result["box"] = {"start_fret": pattern.start_fret, "end_fret": pattern.end_fret}

            result["positions"] = [_position_to_dict(p, session) for p in positions]
            result["count"] = len(positions)
            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to get fretboard positions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_get_positions"] = fretboard_get_positions

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_tunings() -> str:
        """
        List available tunings.

        Returns:
            JSON string mapping tuning names to open strings, low to high

        Example:
            fretboard_list_tunings()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "tunings": {name: list(strings) for name, strings in TUNINGS.items()},
                    "count": len(TUNINGS),
                }
            )
        except Exception as e:
            logger.exception("Failed to list tunings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_tunings"] = fretboard_list_tunings

    return tools
