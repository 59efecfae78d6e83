"""Left-hand mirroring of right-hand-shaped fingerings."""

from __future__ import annotations

from typing import Iterable, Sequence

from .note_model import Note


MIRROR_MAP: dict[int, int] = {1: 5, 2: 4, 3: 3, 4: 2, 5: 1}


def mirror_finger(finger: int) -> int:
    """Map a finger to its left-hand equivalent (1↔5, 2↔4, 3↔3).

    Unassigned (0) stays 0.
    """
    return MIRROR_MAP.get(finger, finger)


def mirror_fingering(fingering: Iterable[int]) -> list[int]:
    return [mirror_finger(f) for f in fingering]


def mirror_notes(notes: Sequence[Note]) -> Sequence[Note]:
    """Mirror every note's assigned finger in place."""
    for note in notes:
        note.fingering = mirror_finger(note.fingering)
    return notes
