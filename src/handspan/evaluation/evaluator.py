"""Evaluator — score computed fingerings against reference annotations.

Predictions and references are matched on ``(onset_time, pitch)`` rather
than list position, so a reference covering only part of a piece still
scores correctly.

Metrics:
    - ``hand_accuracy``   : matched notes assigned to the reference hand
    - ``finger_accuracy`` : matched notes with the reference hand *and* finger
    - ``coverage``        : fraction of reference notes that received a finger
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Iterable

import numpy as np


logger = logging.getLogger(__name__)

NoteKey = tuple[float, int]


def _key(entry: dict[str, Any]) -> NoteKey:
    return (round(float(entry["onset_time"]), 3), int(entry["pitch"]))


def match(
    predicted: Iterable[dict[str, Any]],
    ground_truth: Iterable[dict[str, Any]],
) -> list[tuple[dict[str, Any], dict[str, Any]]]:
    """Pair each reference note with the prediction at the same onset and pitch."""
    by_key = {_key(p): p for p in predicted}
    pairs = []
    for g in ground_truth:
        p = by_key.get(_key(g))
        if p is not None:
            pairs.append((p, g))
    return pairs


def hand_accuracy(predicted: list[dict[str, Any]], ground_truth: list[dict[str, Any]]) -> float:
    pairs = match(predicted, ground_truth)
    if not pairs:
        return 0.0
    return sum(1 for p, g in pairs if p["hand"] == g["hand"]) / len(pairs)


def finger_accuracy(predicted: list[dict[str, Any]], ground_truth: list[dict[str, Any]]) -> float:
    """Fraction of matched notes where both hand and finger agree."""
    pairs = match(predicted, ground_truth)
    if not pairs:
        return 0.0
    correct = sum(1 for p, g in pairs if p["hand"] == g["hand"] and p["finger"] == g["finger"])
    return correct / len(pairs)


def coverage(predicted: list[dict[str, Any]], ground_truth: list[dict[str, Any]]) -> float:
    """Fraction of reference notes that have a prediction with a finger assigned."""
    if not ground_truth:
        return 0.0
    fingered = sum(1 for p, _ in match(predicted, ground_truth) if p["finger"])
    return fingered / len(ground_truth)


def score(predicted: list[dict[str, Any]], ground_truth: list[dict[str, Any]]) -> dict[str, float]:
    return {
        "hand_accuracy": hand_accuracy(predicted, ground_truth),
        "finger_accuracy": finger_accuracy(predicted, ground_truth),
        "coverage": coverage(predicted, ground_truth),
    }


def evaluate_file(
    midi_path: str | Path,
    ground_truth: list[dict[str, Any]],
    hand_size: str | None = None,
    config_path: str | Path | None = None,
) -> dict[str, float]:
    """Run the MIDI pipeline on one file and score it.

    The engine is imported lazily to keep evaluation and the engine
    loosely coupled. Pipeline outputs go to a throwaway directory.
    """
    from ..fingering_engine.annotate import annotate_midi

    with tempfile.TemporaryDirectory() as out_dir:
        predicted = annotate_midi(
            midi_path,
            output_dir=out_dir,
            hand_size=hand_size,
            config_path=config_path,
        )
    metrics = score(predicted, ground_truth)
    logger.info("%s: %s", Path(midi_path).name, metrics)
    return metrics


def evaluate_many(
    pairs: Iterable[tuple[str | Path, list[dict[str, Any]]]],
    hand_size: str | None = None,
    config_path: str | Path | None = None,
) -> dict[str, float]:
    """Mean of each metric over several ``(midi_path, ground_truth)`` pairs.

    Returns all-zero metrics when *pairs* is empty.
    """
    results = [evaluate_file(m, gt, hand_size, config_path) for m, gt in pairs]
    if not results:
        return {"hand_accuracy": 0.0, "finger_accuracy": 0.0, "coverage": 0.0}
    return {key: float(np.mean([r[key] for r in results])) for key in results[0]}
