#!/usr/bin/env python3
"""
Async Fretboard MCP Server using chuk-mcp-server

This server provides MCP tools for exploring scales on a stringed
instrument's neck and building chord progressions from them.

The server provides tools for:
- Browsing the scale catalog and generating scales on any root
- Mapping scales onto the fretboard in several tunings
- Harmonizing scales and exploring chromatic harmony layers
- Generating style-aware chord progressions and analyzing them
- Exporting progressions to MIDI files
"""

import logging
import os
import random
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_fretboard.progression import ProgressionComposer
from chuk_mcp_fretboard.styles import StyleLoader
from chuk_mcp_fretboard.tools import (
    register_chord_tools,
    register_progression_tools,
    register_scale_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Seed for reproducible progressions (set by server.py --seed)
SEED_ENV_VAR = "CHUK_FRETBOARD_SEED"

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-fretboard")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
STYLES_DIR = BASE_PATH / "styles"
OUTPUT_DIR = BASE_PATH / "output"
STYLES_LIBRARY_PATH = Path(__file__).parent / "styles" / "library"

seed = os.environ.get(SEED_ENV_VAR)
rng = random.Random(int(seed)) if seed else random.Random()

# Create managers
style_loader = StyleLoader(
    library_path=STYLES_LIBRARY_PATH,
    project_path=STYLES_DIR,
)
composer = ProgressionComposer(style_loader, rng)

# Register all tools
scale_tools = register_scale_tools(mcp)
chord_tools = register_chord_tools(mcp)
progression_tools = register_progression_tools(mcp, composer, style_loader, OUTPUT_DIR)

# Export tool functions for direct access
fretboard_list_scales = scale_tools["fretboard_list_scales"]
fretboard_generate_scale = scale_tools["fretboard_generate_scale"]
fretboard_get_positions = scale_tools["fretboard_get_positions"]
fretboard_list_tunings = scale_tools["fretboard_list_tunings"]

fretboard_harmonize = chord_tools["fretboard_harmonize"]
fretboard_get_harmony_layers = chord_tools["fretboard_get_harmony_layers"]

fretboard_list_styles = progression_tools["fretboard_list_styles"]
fretboard_generate_progression = progression_tools["fretboard_generate_progression"]
fretboard_analyze_progression = progression_tools["fretboard_analyze_progression"]
fretboard_export_progression_midi = progression_tools["fretboard_export_progression_midi"]

logger.info("CHUK Fretboard MCP Server initialized")
logger.info(f"  Styles library: {STYLES_LIBRARY_PATH}")
logger.info(f"  Project styles: {STYLES_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
if seed:
    logger.info(f"  Progression seed: {seed}")
