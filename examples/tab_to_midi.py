#!/usr/bin/env python3
"""CLI tool to render a tab file to a MIDI file.

Usage:
    python examples/tab_to_midi.py <kind> <input_file> <output_file> [modifiers...]

Examples:
    python examples/tab_to_midi.py drum beat.txt beat.mid sn
    python examples/tab_to_midi.py guitar bass.txt bass.mid sn c1
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from midi_tab import DEFAULT_CONFIG, Score, TabConfig, TabError
from midi_tab.tab import render_tab


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Render ASCII guitar, drum or piano tab to a MIDI file",
    )
    parser.add_argument("kind", choices=["guitar", "drum", "piano"], help="Tab type")
    parser.add_argument("input", type=Path, help="Input tab file")
    parser.add_argument("output", type=Path, help="Output MIDI file")
    parser.add_argument(
        "modifiers",
        nargs="*",
        help="Default modifiers, e.g. 'sn' (sixteenth notes) or 'c1' (channel 1)",
    )
    parser.add_argument("--bpm", type=float, default=120.0, help="Tempo in beats per minute")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the input contains no tab lines",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.input.exists():
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1

    text = args.input.read_text(encoding="utf-8")
    config = DEFAULT_CONFIG
    if args.strict:
        config = TabConfig(strict=True)

    score = Score(tempo=round(60_000_000 / args.bpm))
    try:
        job = render_tab(score, text, args.kind, *args.modifiers, config=config)
    except TabError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    score.write(args.output)
    print(
        f"Rendered {len(job.streams)} lines, {len(score.notes)} notes to {args.output}",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
