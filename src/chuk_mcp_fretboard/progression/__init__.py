"""
Progression generation and analysis.
"""

from chuk_mcp_fretboard.progression.analyzer import (
    ChordAnalysis,
    ProgressionAnalysis,
    TransitionAnalysis,
    analyze_progression,
)
from chuk_mcp_fretboard.progression.composer import (
    ProgressionComposer,
    ensure_resolution,
    generate_progression,
)

__all__ = [
    "ChordAnalysis",
    "ProgressionAnalysis",
    "ProgressionComposer",
    "TransitionAnalysis",
    "analyze_progression",
    "ensure_resolution",
    "generate_progression",
]
