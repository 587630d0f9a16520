"""
Pytest configuration and shared fixtures.
"""

import random
import tempfile
from pathlib import Path

import pytest

from chuk_mcp_fretboard.core.scale import Scale, generate_scale
from chuk_mcp_fretboard.harmony.layers import HarmonyLayers, get_progression_layers


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def c_major() -> Scale:
    """C major scale."""
    scale = generate_scale("C", "major")
    assert scale is not None
    return scale


@pytest.fixture
def c_layers(c_major: Scale) -> HarmonyLayers:
    """Harmony layers for C major."""
    return get_progression_layers(c_major)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible progressions."""
    return random.Random(1234)


@pytest.fixture
def styles_library_path() -> Path:
    """Path to the built-in style library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_fretboard" / "styles" / "library"
