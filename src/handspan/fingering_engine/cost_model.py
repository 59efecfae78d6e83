"""Cost Model — effort score for a candidate fingering over a window.

The score is the mean finger velocity across the window's transitions:
for every adjacent pair the assigned finger must travel from its
currently projected position to the key, in the time between onsets.
Weak fingers and black keys scale the velocity up. Lower is better.

Position state is local to each call, so concurrent evaluations of
different candidates never share mutable arrays.
"""

from __future__ import annotations

from typing import Sequence

from .hand_model import HandState, anchored
from .note_model import Note


def transition_velocity(
    hand: HandState,
    positions: dict[int, float],
    finger_b: int,
    note_a: Note,
    note_b: Note,
) -> float:
    """Weighted velocity of *finger_b* reaching *note_b* after *note_a*.

    Args:
        hand: Supplies weights, black-key bias and time smoothing.
        positions: Projected finger positions before the move.
        finger_b: Finger assigned to *note_b* (1–5).
        note_a: Previous note.
        note_b: Target note.

    Returns:
        Non-negative velocity, normalised by finger strength.
    """
    dx = abs(note_b.x - positions[finger_b])
    dt = abs(note_b.time - note_a.time) + hand.config.time_smoothing
    v = dx / dt
    if note_b.is_black:
        return v / (hand.weights[finger_b] * hand.black_bias[finger_b])
    return v / hand.weights[finger_b]


def window_cost(
    hand: HandState,
    fingering: Sequence[int],
    notes: Sequence[Note | None],
) -> float:
    """Mean transition velocity of *fingering* played over *notes*.

    Positions are anchored on the first note, then re-anchored after each
    evaluated pair. A pair with a missing note or an unassigned finger
    contributes zero but still counts towards the mean.

    Args:
        hand: Hand model (geometry is read, never mutated).
        fingering: Candidate fingers, one per window note.
        notes: Window notes, aligned with *fingering*.

    Returns:
        The mean over ``len(fingering) - 1`` transitions; 0.0 when the
        window has fewer than two notes.
    """
    transitions = len(fingering) - 1
    if transitions < 1:
        return 0.0

    positions = anchored(hand.rest, fingering, notes, 0) or dict(hand.current_positions)

    total = 0.0
    for i in range(1, len(fingering)):
        note_a = notes[i - 1] if i - 1 < len(notes) else None
        note_b = notes[i] if i < len(notes) else None
        finger_b = fingering[i]
        if note_a is None or note_b is None or finger_b not in hand.rest:
            continue
        total += transition_velocity(hand, positions, finger_b, note_a, note_b)
        positions = anchored(hand.rest, fingering, notes, i) or positions

    return total / transitions
