"""Dataset — load and validate reference fingering annotations.

Reference files follow the same schema as the MIDI pipeline output::

    [
      {"onset_time": 0.0, "pitch": 60, "hand": "R", "finger": 1},
      {"onset_time": 0.5, "pitch": 48, "hand": "L", "finger": 5},
      ...
    ]

Files are named ``*_ground_truth.json`` and paired with a MIDI file of
the same stem (``sonata_ground_truth.json`` ↔ ``sonata.mid``).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


_VALID_HANDS: set[str] = {"L", "R"}
_VALID_FINGERS: set[int] = {1, 2, 3, 4, 5}
_SUFFIX: str = "_ground_truth.json"


def load_ground_truth(json_path: str | Path) -> list[dict[str, Any]]:
    """Load and validate a single reference annotation file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON array or an entry is invalid.
    """
    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"Ground-truth file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)

    if not isinstance(data, list):
        raise ValueError(
            f"Ground-truth file must contain a JSON array, got {type(data).__name__}: {path}"
        )

    validated: list[dict[str, Any]] = []
    for i, entry in enumerate(data):
        missing = [k for k in ("onset_time", "pitch", "hand", "finger") if k not in entry]
        if missing:
            raise ValueError(f"Entry {i} in '{path.name}' is missing {', '.join(missing)}")

        hand = str(entry["hand"]).upper()[:1]
        finger = int(entry["finger"])
        if hand not in _VALID_HANDS:
            raise ValueError(f"Entry {i} in '{path.name}': hand must be L or R, got {entry['hand']!r}")
        if finger not in _VALID_FINGERS:
            raise ValueError(f"Entry {i} in '{path.name}': finger must be 1–5, got {finger}")

        validated.append(
            {
                "onset_time": float(entry["onset_time"]),
                "pitch": int(entry["pitch"]),
                "hand": hand,
                "finger": finger,
            }
        )

    return validated


def find_reference_pairs(directory: str | Path) -> list[tuple[Path, Path]]:
    """Pair every ``*_ground_truth.json`` in *directory* with its MIDI file.

    Reference files without a matching ``.mid`` / ``.midi`` are skipped.

    Returns:
        ``(midi_path, ground_truth_path)`` tuples sorted by stem.

    Raises:
        FileNotFoundError: If *directory* does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Reference directory not found: {directory}")

    pairs: list[tuple[Path, Path]] = []
    for gt_path in sorted(directory.glob(f"*{_SUFFIX}")):
        stem = gt_path.name[: -len(_SUFFIX)]
        for ext in (".mid", ".midi"):
            midi_path = directory / f"{stem}{ext}"
            if midi_path.exists():
                pairs.append((midi_path, gt_path))
                break
    return pairs
