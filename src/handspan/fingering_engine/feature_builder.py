"""Feature Builder — chord tagging for note records.

The fingering core trusts a per-note chord flag and never detects chords
itself. Sources that do not carry one (MIDI files) are tagged here:
notes whose onsets lie within a tolerance of a group's first onset form
one chord. Groups of two or more notes are chords.

All computations are deterministic.
"""

from __future__ import annotations

from typing import Any


def chord_groups(notes: list[dict[str, Any]], tolerance: float = 0.03) -> list[list[int]]:
    """Group note indices by (near-)simultaneous onset.

    The input must be sorted by ``start``.

    Returns:
        Index groups in order; singletons included.
    """
    groups: list[list[int]] = []
    group_start: float | None = None
    for i, note in enumerate(notes):
        if group_start is None or abs(note["start"] - group_start) > tolerance:
            groups.append([])
            group_start = note["start"]
        groups[-1].append(i)
    return groups


def mark_chords(notes: list[dict[str, Any]], tolerance: float = 0.03) -> list[dict[str, Any]]:
    """Return copies of *notes* tagged with chord membership.

    Each copy gains:
        - ``is_chord``   (bool) — part of a group of two or more notes
        - ``chord_id``   (int)  — 1-based chord counter, 0 for single notes
        - ``n_in_chord`` (int)  — size of the group
        - ``chord_nr``   (int)  — position within the group
    """
    tagged: list[dict[str, Any]] = [dict(note) for note in notes]
    chord_count = 0

    for group in chord_groups(notes, tolerance):
        in_chord = len(group) > 1
        if in_chord:
            chord_count += 1
        for nr, idx in enumerate(group):
            tagged[idx]["is_chord"] = in_chord
            tagged[idx]["chord_id"] = chord_count if in_chord else 0
            tagged[idx]["n_in_chord"] = len(group)
            tagged[idx]["chord_nr"] = nr

    return tagged
