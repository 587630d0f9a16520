#!/usr/bin/env python3
"""
Example: Generate, analyze and export a chord progression.

Builds a scale, shows its harmony layers, composes a progression in a few
styles, prints the analysis and writes one of them to a MIDI file.

Usage:
    python examples/generate_progression.py [root] [scale_type]
"""

import random
import sys
from pathlib import Path

from chuk_mcp_fretboard.core.fretboard import position_pattern
from chuk_mcp_fretboard.core.scale import generate_scale
from chuk_mcp_fretboard.export.midi import save_progression_midi
from chuk_mcp_fretboard.harmony import get_progression_layers
from chuk_mcp_fretboard.progression import ProgressionComposer, analyze_progression


def main() -> None:
    """Walk from a scale to a MIDI file."""
    root = sys.argv[1] if len(sys.argv) > 1 else "C"
    scale_type = sys.argv[2] if len(sys.argv) > 2 else "major"

    scale = generate_scale(root, scale_type)
    if scale is None:
        print(f"Unknown scale: {root} {scale_type}")
        return

    print(f"{scale}: {' '.join(scale.notes)}")
    print(f"  Formula: {scale.formula}")

    box = position_pattern(scale, 1)
    if box:
        print(f"  First box: frets {box.start_fret}-{box.end_fret}, {len(box.positions)} notes")
    print()

    layers = get_progression_layers(scale)
    print("Harmony layers:")
    print(f"  Main:      {' '.join(c.symbol for c in layers.main_chords)}")
    print(f"  Secondary: {' '.join(c.symbol for c in layers.secondary_dominants)}")
    print(f"  Modal:     {', '.join(c.symbol for c in layers.modal_interchange)}")
    print(f"  Neapolitan: {', '.join(c.symbol for c in layers.neapolitan)}")
    print()

    composer = ProgressionComposer(rng=random.Random(42))
    last = []
    for style in ["pop", "jazz", "metal"]:
        progression = composer.generate(scale, length=8, complexity="moderate", style=style)
        if not progression:
            print(f"{style}: scale is too small for progressions")
            continue

        analysis = analyze_progression(progression, scale)
        print(f"{style}: {' | '.join(c.symbol for c in progression)}")
        print(f"  Degrees: {' '.join(c.degree for c in progression)}")
        print(f"  Complexity: {analysis.complexity.value}")
        for feature in analysis.features:
            print(f"  - {feature}")
        for chord in progression:
            if chord.expects_resolution:
                print(f"  ! {chord.symbol} expects {chord.expects_resolution}")
        print()
        last = progression

    if last:
        output = Path(__file__).parent / "output" / "progression.mid"
        save_progression_midi(last, output, tempo_bpm=96, beats_per_chord=4)
        print(f"Saved: {output}")


if __name__ == "__main__":
    main()
