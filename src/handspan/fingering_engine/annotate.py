"""Annotator — run the fingering search over whole documents and export results.

Two input shapes are supported:
    1. Track documents (``{"tracksV2": {"right": [...], "left": [...]}}``),
       where every hand is a list of blocks carrying ``notes``. Fingers are
       written back onto the raw note records as ``finger``.
    2. MIDI files, split between the hands by pitch, chord-tagged, and
       exported as a flat annotation list (optionally as annotated MIDI).
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

import pretty_midi

from ..config import HandModelConfig, default_config, load_config
from .feature_builder import mark_chords
from .midi_parser import extract_notes, load_midi, split_hands
from .note_model import normalize
from .solver import run_sequence


logger = logging.getLogger(__name__)

HAND_LABELS: dict[str, str] = {"right": "R", "left": "L"}


def flatten_blocks(blocks: Any) -> list[dict[str, Any]]:
    """Note records of every well-formed block, in order.

    Blocks that are not mappings with a ``notes`` list, and note entries
    that are not mappings, are skipped.
    """
    records: list[dict[str, Any]] = []
    if not isinstance(blocks, list):
        return records
    for block in blocks:
        if isinstance(block, dict) and isinstance(block.get("notes"), list):
            records.extend(n for n in block["notes"] if isinstance(n, dict))
    return records


def process_tracks(
    data: dict[str, Any],
    hand_size: str | None = None,
    depth: int | None = None,
    config: HandModelConfig | None = None,
) -> dict[str, Any]:
    """Assign fingers to every note of a track document.

    The input is deep-copied; the returned document carries a ``finger``
    key on every note record (left-hand fingers already mirrored).

    Args:
        data: Document with a ``tracksV2`` mapping of hand → blocks.
        hand_size: Hand-size label (``XXS`` … ``XXL``).
        depth: Lookahead depth (clamped to 3–9).
        config: Hand model; defaults to the packaged YAML.

    Returns:
        The annotated copy, or *data* unchanged if it has no valid
        ``tracksV2`` mapping.
    """
    tracks = data.get("tracksV2") if isinstance(data, dict) else None
    if not isinstance(tracks, dict):
        logger.warning("No valid tracksV2 data found; document left unchanged")
        return data

    data = copy.deepcopy(data)
    tracks = data["tracksV2"]

    for side in ("right", "left"):
        records = flatten_blocks(tracks.get(side))
        if not records:
            continue

        notes = [normalize(record) for record in records]
        run_sequence(notes, hand_size=hand_size, side=side, depth=depth, config=config)

        for record, note in zip(records, notes):
            record["finger"] = note.fingering

        assigned = sum(1 for n in notes if n.fingering)
        logger.info("%s hand: %d/%d notes fingered", side, assigned, len(notes))

    return data


def load_tracks(json_path: str | Path) -> dict[str, Any]:
    """Read a track document from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If it is not valid JSON.
    """
    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"Track file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse track file '{path.name}': {exc}") from exc


def annotate_tracks_file(
    json_path: str | Path,
    output_dir: str | Path | None = None,
    hand_size: str | None = None,
    depth: int | None = None,
    config_path: str | Path | None = None,
) -> tuple[dict[str, Any], Path]:
    """Annotate a track JSON file and save ``<stem>_updated.json``.

    Args:
        json_path: Input track document.
        output_dir: Destination directory; defaults to the input's folder.
        hand_size: Hand-size label.
        depth: Lookahead depth.
        config_path: Optional hand-model YAML.

    Returns:
        ``(annotated_document, output_path)``.
    """
    json_path = Path(json_path)
    output_dir = json_path.parent if output_dir is None else Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path) if config_path else default_config()
    data = process_tracks(load_tracks(json_path), hand_size, depth, config)

    out_path = output_dir / f"{json_path.stem}_updated.json"
    with open(out_path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False)

    logger.info("Wrote %s", out_path)
    return data, out_path


def annotate_midi(
    midi_path: str | Path,
    output_dir: str | Path | None = None,
    hand_size: str | None = None,
    depth: int | None = None,
    config_path: str | Path | None = None,
    export_midi: bool = False,
) -> list[dict[str, Any]]:
    """Run the full fingering pipeline on a MIDI file.

    Args:
        midi_path: Path to the input ``.mid`` / ``.midi`` file.
        output_dir: Directory for output files; defaults to the input's folder.
        hand_size: Hand-size label.
        depth: Lookahead depth.
        config_path: Optional hand-model YAML.
        export_midi: If ``True``, also save an annotated MIDI file.

    Returns:
        Annotation dicts sorted by ``(onset_time, pitch)``, each with
        ``onset_time``, ``pitch``, ``hand`` (``"L"``/``"R"``), ``finger``
        and ``cost``.
    """
    midi_path = Path(midi_path)
    output_dir = midi_path.parent if output_dir is None else Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path) if config_path else default_config()
    midi_data = load_midi(midi_path)
    hands = split_hands(extract_notes(midi_data), config.split_pitch)

    annotations: list[dict[str, Any]] = []
    for side, records in hands.items():
        if not records:
            continue
        notes = [normalize(r) for r in mark_chords(records, config.chord_tolerance)]
        run_sequence(notes, hand_size=hand_size, side=side, depth=depth, config=config)
        for note in notes:
            annotations.append(
                {
                    "onset_time": note.time,
                    "pitch": note.pitch,
                    "hand": HAND_LABELS[side],
                    "finger": note.fingering,
                    "cost": note.cost,
                }
            )

    annotations.sort(key=lambda a: (a["onset_time"], a["pitch"]))

    stem = midi_path.stem
    json_path = output_dir / f"{stem}_annotations.json"
    with open(json_path, "w", encoding="utf-8") as fh:
        json.dump(annotations, fh, indent=2, ensure_ascii=False)
    logger.info("Wrote %s (%d notes)", json_path, len(annotations))

    if export_midi:
        _export_annotated_midi(midi_data, annotations, output_dir, stem)

    return annotations


def _export_annotated_midi(
    midi_data: pretty_midi.PrettyMIDI,
    annotations: list[dict[str, Any]],
    output_dir: Path,
    stem: str,
) -> Path:
    """Write an annotated MIDI file with fingering encoded as lyrics.

    Each fingered note becomes a ``pretty_midi.Lyric`` at its onset with
    the text ``H<hand>F<finger>`` (e.g. ``HRF2``).
    """
    for ann in annotations:
        if not ann["finger"]:
            continue
        label = f"H{ann['hand']}F{ann['finger']}"
        midi_data.lyrics.append(pretty_midi.Lyric(text=label, time=ann["onset_time"]))

    midi_out_path = output_dir / f"{stem}_annotated.mid"
    midi_data.write(str(midi_out_path))
    logger.info("Wrote %s", midi_out_path)
    return midi_out_path

def sample_tracks() -> dict[str, Any]:
    """Built-in demo document without fingering.

    Right hand: an 18-note scale passage ending on a two-note onset.
    Left hand: an 11-note passage in whole-second steps.
    """
    right_notes = [
        (60, 0.0, 0.5, "C4"), (62, 0.5, 0.5, "D4"), (64, 1.0, 0.5, "E4"),
        (65, 1.5, 0.5, "F4"), (67, 2.0, 0.5, "G4"), (66, 2.5, 0.5, "F#4"),
        (65, 3.0, 0.5, "F4"), (64, 3.5, 0.5, "E4"), (62, 4.0, 0.5, "D4"),
        (61, 4.5, 0.5, "C#4"), (60, 5.0, 0.5, "C4"), (62, 5.5, 0.5, "D4"),
        (64, 6.0, 0.5, "E4"), (66, 6.5, 0.5, "F#4"), (68, 7.0, 0.5, "G#4"),
        (69, 7.5, 0.5, "A4"), (71, 8.0, 0.0, "B4"), (72, 8.0, 1.0, "C5"),
    ]
    left_notes = [
        (48, 0.0, 1.0, "C3"), (50, 1.0, 1.0, "D3"), (52, 2.0, 1.0, "E3"),
        (53, 3.0, 1.0, "F3"), (55, 4.0, 1.0, "G3"), (54, 5.0, 1.0, "F#3"),
        (53, 6.0, 1.0, "F3"), (52, 7.0, 1.0, "E3"), (50, 8.0, 1.0, "D3"),
        (49, 9.0, 1.0, "C#3"), (48, 10.0, 2.0, "C3"),
    ]

    def block(notes: list[tuple[int, float, float, str]]) -> dict[str, Any]:
        return {
            "notes": [
                {"note": p, "start": t, "duration": d, "noteName": name}
                for p, t, d, name in notes
            ]
        }

    return {"tracksV2": {"right": [block(right_notes)], "left": [block(left_notes)]}}
