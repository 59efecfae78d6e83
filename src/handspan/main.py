"""handspan — command-line entry point.

Usage::

    handspan song.json --hand-size S
    handspan song.mid --export-midi --table
    handspan --sample -o out/

Track documents (``.json``) are written back as ``<stem>_updated.json``;
MIDI files produce ``<stem>_annotations.json`` (and optionally an
annotated MIDI file).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import default_config, load_config, setup_logging
from .fingering_engine.annotate import (
    annotate_midi,
    annotate_tracks_file,
    process_tracks,
    sample_tracks,
)
from .report import annotations_to_frame, finger_usage, tracks_to_annotations


logger = logging.getLogger(__name__)

MIDI_SUFFIXES: tuple[str, ...] = (".mid", ".midi")


def build_parser() -> argparse.ArgumentParser:
    sizes = list(default_config().hand_sizes)
    parser = argparse.ArgumentParser(
        prog="handspan",
        description="Assign piano fingering to track JSON or MIDI files.",
    )
    parser.add_argument("input", nargs="?", type=Path, help="track .json or .mid/.midi file")
    parser.add_argument("--sample", action="store_true", help="annotate the built-in demo document")
    parser.add_argument("-s", "--hand-size", default=None, help=f"hand size label ({', '.join(sizes)})")
    parser.add_argument("-d", "--depth", type=int, default=None, help="lookahead depth (3-9)")
    parser.add_argument("-c", "--config", type=Path, default=None, help="hand model YAML")
    parser.add_argument("-o", "--output-dir", type=Path, default=None, help="output directory")
    parser.add_argument("--export-midi", action="store_true", help="also write annotated MIDI (MIDI input only)")
    parser.add_argument("--table", action="store_true", help="print the annotation table and finger usage")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every search step")
    return parser


def _print_table(annotations: list[dict]) -> None:
    print(annotations_to_frame(annotations).to_string(index=False))
    print()
    print(finger_usage(annotations).to_string())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not args.sample and args.input is None:
        parser.error("an input file or --sample is required")

    try:
        if args.sample:
            config = load_config(args.config) if args.config else default_config()
            data = process_tracks(sample_tracks(), args.hand_size, args.depth, config)
            output_dir = args.output_dir or Path.cwd()
            output_dir.mkdir(parents=True, exist_ok=True)
            out_path = output_dir / "sample_data_updated.json"
            out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            logger.info("Wrote %s", out_path)
            annotations = tracks_to_annotations(data)
        elif args.input.suffix.lower() in MIDI_SUFFIXES:
            annotations = annotate_midi(
                args.input,
                output_dir=args.output_dir,
                hand_size=args.hand_size,
                depth=args.depth,
                config_path=args.config,
                export_midi=args.export_midi,
            )
        else:
            data, _ = annotate_tracks_file(
                args.input,
                output_dir=args.output_dir,
                hand_size=args.hand_size,
                depth=args.depth,
                config_path=args.config,
            )
            annotations = tracks_to_annotations(data)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    if args.table:
        _print_table(annotations)
    return 0


if __name__ == "__main__":
    sys.exit(main())
