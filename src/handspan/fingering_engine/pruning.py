"""Transition pruning — cut implausible finger moves before scoring.

These are heuristic approximations of biomechanics, not a simulation.
A transition touching a chord note is never pruned; chord membership is
whatever the upstream note source tagged.
"""

from __future__ import annotations

from .note_model import Note


def skip(
    finger_a: int,
    finger_b: int,
    note_a: Note | None,
    note_b: Note | None,
    long_note: float = 4.0,
    thumb_hold: float = 2.0,
) -> bool:
    """Return ``True`` if ``finger_a → finger_b`` over ``note_a → note_b`` is illegal.

    Args:
        finger_a: Finger on the first note (1–5).
        finger_b: Candidate finger on the second note (1–5).
        note_a: First note.
        note_b: Second note.
        long_note: A note held at least this long (s) may slide to the
            next key on the same finger.
        thumb_hold: The thumb may leave a black key shorter than this
            (s) only when nothing crosses under it leftward.

    Returns:
        ``True`` when the branch should be pruned.
    """
    if note_a is None or note_b is None:
        return True

    if note_a.is_chord or note_b.is_chord:
        return False

    xba = note_b.x - note_a.x

    # Same finger on a different key, unless the first note is held.
    if finger_a == finger_b and xba and note_a.duration < long_note:
        return True

    if finger_a > 1:
        # Non-thumb fingers must keep key order.
        if finger_b > 1 and (finger_b - finger_a) * xba < 0:
            return True
        # Thumb passing under must not land on a black key.
        if finger_b == 1 and note_b.is_black and xba > 0:
            return True
    elif note_a.is_black and xba < 0 and finger_b > 1 and note_a.duration < thumb_hold:
        return True

    return False
