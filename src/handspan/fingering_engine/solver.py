"""Solver — sliding-window branch-and-bound fingering search.

For each note the solver enumerates every legal fingering of the next
``depth`` notes (depth-first, fingers ascending), scores each complete
candidate with :func:`.cost_model.window_cost`, and commits only the
first finger of the cheapest one. The window then slides by one note and
starts from the finger the previous winner chose for that note.

Design choices:
    - No randomness: ties go to the first candidate found, which is the
      lexicographically smallest fingering.
    - The enumeration uses an explicit stack with immutable paths, so the
      stack depth is bounded and branches share no mutable state.
    - The configured depth on :class:`HandState` is never mutated; the
      shrinking window near the end is a per-step local value.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..config import HandModelConfig
from .cost_model import window_cost
from .hand_model import FINGERS, HandState
from .mirror import mirror_notes
from .note_model import Note
from .pruning import skip


logger = logging.getLogger(__name__)

# Returned as the cost of a window in which every candidate was pruned.
NO_CANDIDATE_COST: float = -1.0


def optimize_window(
    hand: HandState,
    notes: Sequence[Note],
    start_finger: int = 0,
) -> tuple[list[int], float]:
    """Find the cheapest legal fingering for a window of notes.

    Args:
        hand: Hand model and configured depth.
        notes: Window notes (only the first ``hand.depth`` are used).
        start_finger: Finger forced on the first note, or 0 for any.

    Returns:
        ``(fingering, cost)``. When every candidate is pruned the
        fingering is all zeros and the cost is ``NO_CANDIDATE_COST``.
    """
    depth = min(hand.depth, len(notes))
    best: list[int] = [0] * depth
    best_cost: float = math.inf
    if depth == 0:
        return best, NO_CANDIDATE_COST

    long_note = hand.config.long_note_duration
    thumb_hold = hand.config.thumb_hold_duration
    starts = (start_finger,) if start_finger in FINGERS else FINGERS

    # Reversed pushes make the stack pop fingers in ascending order.
    stack: list[tuple[int, ...]] = [(f,) for f in reversed(starts)]
    while stack:
        path = stack.pop()
        level = len(path)
        if level == depth:
            cost = window_cost(hand, path, notes)
            if cost < best_cost:
                best, best_cost = list(path), cost
            continue

        prev_finger = path[-1]
        note_a, note_b = notes[level - 1], notes[level]
        for finger in reversed(FINGERS):
            if skip(prev_finger, finger, note_a, note_b, long_note, thumb_hold):
                continue
            stack.append(path + (finger,))

    if best_cost is math.inf:
        return best, NO_CANDIDATE_COST
    return best, best_cost


def generate(hand: HandState, notes: Sequence[Note]) -> Sequence[Note]:
    """Annotate *notes* in place with the search's fingering.

    The result is in the right-hand frame; no mirroring happens here.

    Args:
        hand: Hand state for this sequence. Its ``current_positions`` and
            ``position_history`` are updated as steps are committed.
        notes: Time-ordered notes for one hand.

    Returns:
        The same *notes*, with ``fingering`` and ``cost`` set.
    """
    total = len(notes)
    start_finger = 0
    last_cost: float | None = None

    for i in range(total):
        window_depth = min(hand.depth, total - i)
        if window_depth < 2:
            break

        window = notes[i : i + window_depth]
        fingering, cost = optimize_window(hand, window, start_finger)
        if cost == NO_CANDIDATE_COST:
            logger.warning(
                "No legal fingering for window at note %d (pitch %d); leaving it unassigned",
                i,
                notes[i].pitch,
            )

        notes[i].fingering = fingering[0]
        notes[i].cost = cost
        start_finger = fingering[1]
        last_cost = cost

        hand.set_anchor(fingering, window, 0)
        hand.record_positions()
        logger.debug(
            "note %d pitch %d -> finger %d  window=%s  v=%.3f",
            i,
            notes[i].pitch,
            fingering[0],
            fingering,
            cost,
        )

    if hand.config.fill_trailing_note and total >= 2 and start_finger:
        tail = notes[-1]
        tail.fingering = start_finger
        tail.cost = last_cost

    return notes


def run_sequence(
    notes: Sequence[Note],
    hand_size: str | None = None,
    side: str = "right",
    depth: int | None = None,
    config: HandModelConfig | None = None,
) -> Sequence[Note]:
    """Assign fingers to one hand's note sequence.

    Runs the windowed search, then mirrors the result if *side* is
    ``"left"``. An empty sequence is a no-op.

    Args:
        notes: Time-ordered notes for one hand, annotated in place.
        hand_size: Hand-size label; defaults to the config's default.
        side: ``"right"`` or ``"left"``.
        depth: Lookahead depth (clamped to 3–9).
        config: Hand model; defaults to the packaged YAML.

    Returns:
        The same *notes*.
    """
    if not notes:
        return notes

    hand = HandState(side=side, size=hand_size, depth=depth, config=config)
    logger.debug("Searching %d notes with %r", len(notes), hand)
    generate(hand, notes)

    if hand.side == "left":
        mirror_notes(notes)
    return notes
