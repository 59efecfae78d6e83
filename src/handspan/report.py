"""Report — tabular summaries of fingering annotations (pandas)."""

from __future__ import annotations

from typing import Any

import pandas as pd

from .fingering_engine.annotate import HAND_LABELS, flatten_blocks
from .fingering_engine.note_model import normalize


_COLUMNS: dict[str, str] = {
    "onset_time": "Onset (s)",
    "pitch": "Pitch",
    "hand": "Hand",
    "finger": "Finger",
    "cost": "Cost",
}


def annotations_to_frame(annotations: list[dict[str, Any]]) -> pd.DataFrame:
    """One row per annotated note with display column names."""
    df = pd.DataFrame(annotations, columns=list(_COLUMNS))
    return df.rename(columns=_COLUMNS)


def tracks_to_annotations(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Flatten an annotated track document into annotation records."""
    rows: list[dict[str, Any]] = []
    tracks = data.get("tracksV2") if isinstance(data, dict) else None
    if not isinstance(tracks, dict):
        return rows
    for side, label in HAND_LABELS.items():
        for note in map(normalize, flatten_blocks(tracks.get(side))):
            rows.append(
                {
                    "onset_time": note.time,
                    "pitch": note.pitch,
                    "hand": label,
                    "finger": note.fingering,
                    "cost": None,
                }
            )
    rows.sort(key=lambda r: (r["onset_time"], r["pitch"]))
    return rows


def finger_usage(annotations: list[dict[str, Any]]) -> pd.DataFrame:
    """Count of notes per hand and finger (0 = unassigned).

    Returns a frame indexed by hand with one column per finger 0–5.
    """
    df = pd.DataFrame(annotations, columns=["hand", "finger"])
    counts = pd.crosstab(df["hand"], df["finger"])
    return counts.reindex(columns=range(6), fill_value=0)
