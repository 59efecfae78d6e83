"""MIDI Parser — turn MIDI files into per-hand note records.

Records produced here use the same field names as track-document notes
(``note``, ``start``, ``duration``), so both sources go through
:func:`.note_model.normalize` unchanged. Drum tracks are ignored.

No fingering logic lives here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

import pretty_midi


logger = logging.getLogger(__name__)

# Onsets and durations are rounded to the microsecond so that notes
# written on the same tick compare equal.
_TIME_DIGITS: int = 6


def load_midi(midi_path: str | Path) -> pretty_midi.PrettyMIDI:
    """Parse *midi_path* with pretty_midi.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If pretty_midi cannot read it.
    """
    path = Path(midi_path)
    if not path.is_file():
        raise FileNotFoundError(f"MIDI file not found: {path}")

    try:
        midi_data = pretty_midi.PrettyMIDI(str(path))
    except Exception as exc:
        raise ValueError(f"Failed to parse MIDI file '{path.name}': {exc}") from exc

    pitched = sum(1 for inst in midi_data.instruments if not inst.is_drum)
    logger.info("Loaded %s (%d pitched tracks)", path.name, pitched)
    return midi_data


def _pitched_notes(midi_data: pretty_midi.PrettyMIDI) -> Iterator[tuple[int, pretty_midi.Note]]:
    for instrument in midi_data.instruments:
        if not instrument.is_drum:
            for note in instrument.notes:
                yield instrument.program, note


def extract_notes(midi_data: pretty_midi.PrettyMIDI) -> list[dict[str, Any]]:
    """Every pitched note as a track-style record, ordered by ``(start, note)``.

    Each record carries ``note``, ``start``, ``duration``, ``velocity``
    and the source ``program``.
    """
    records = [
        {
            "note": note.pitch,
            "start": round(note.start, _TIME_DIGITS),
            "duration": round(note.get_duration(), _TIME_DIGITS),
            "velocity": note.velocity,
            "program": program,
        }
        for program, note in _pitched_notes(midi_data)
    ]
    records.sort(key=lambda r: (r["start"], r["note"]))
    return records


def split_hands(
    records: list[dict[str, Any]],
    split_pitch: int = 60,
) -> dict[str, list[dict[str, Any]]]:
    """Assign each record to a hand by pitch.

    Pitches strictly below *split_pitch* go to the left hand, the rest to
    the right. Relative order is preserved.

    Returns:
        ``{"right": [...], "left": [...]}``.
    """
    hands: dict[str, list[dict[str, Any]]] = {"right": [], "left": []}
    for record in records:
        hands["left" if record["note"] < split_pitch else "right"].append(record)
    return hands
