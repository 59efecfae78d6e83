"""Hand Physical Model — rest geometry and anchor re-projection.

The hand is modelled as a rigid frame: every finger has a fixed rest
offset (cm), scaled by the hand-size factor. Knowing where one finger
really is fixes where all the others are:

    position[j] = (rest[j] - rest[anchor]) + note.x

The search always reasons in a right-hand-shaped frame; left-hand output
is mirrored afterwards (see :mod:`.mirror`).
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..config import HandModelConfig, default_config
from .note_model import Note


logger = logging.getLogger(__name__)

FINGERS: tuple[int, ...] = (1, 2, 3, 4, 5)
SIDES: tuple[str, ...] = ("right", "left")
MIN_DEPTH: int = 3
MAX_DEPTH: int = 9

# Finger number → projected key position.
Positions = dict[int, float]


def clamp_depth(depth: int) -> int:
    """Clamp a configured lookahead depth into ``[MIN_DEPTH, MAX_DEPTH]``."""
    return max(MIN_DEPTH, min(MAX_DEPTH, int(depth)))


def hand_size_factor(size: str, config: HandModelConfig | None = None) -> float:
    """Look up the geometry multiplier for a hand-size label.

    Labels are matched case-insensitively. An unknown label falls back to
    a factor of 1.00 and logs a warning.
    """
    config = config or default_config()
    label = str(size).strip().upper()
    factor = config.hand_sizes.get(label)
    if factor is None:
        logger.warning("Unknown hand size %r; using factor 1.00", size)
        return 1.0
    return factor


def project(rest: Positions, finger: int, x: float) -> Positions:
    """Positions of all fingers when *finger* sits on key position *x*."""
    anchor = rest[finger]
    return {j: (rest[j] - anchor) + x for j in FINGERS}


def anchored(
    rest: Positions,
    fingering: Sequence[int],
    notes: Sequence[Note | None],
    index: int,
) -> Positions | None:
    """Re-project from ``fingering[index]`` on ``notes[index]``.

    Returns ``None`` when the finger is unassigned or the note is missing,
    in which case callers keep their previous positions.
    """
    if index >= len(fingering) or index >= len(notes):
        return None
    finger = fingering[index]
    note = notes[index]
    if finger not in rest or note is None:
        return None
    return project(rest, finger, note.x)


class HandState:
    """Per-hand optimisation context.

    Args:
        side: ``"right"`` or ``"left"``. Only used for mirroring after the
            search; the search itself is side-agnostic.
        size: Hand-size label (``XXS`` … ``XXL``).
        depth: Configured lookahead depth, clamped to 3–9. Defaults to the
            config's ``search_depth``.
        config: Hand model; defaults to the packaged YAML.
    """

    def __init__(
        self,
        side: str = "right",
        size: str | None = None,
        depth: int | None = None,
        config: HandModelConfig | None = None,
    ) -> None:
        self.config: HandModelConfig = config or default_config()
        side = str(side).lower()
        if side not in SIDES:
            logger.warning("Unknown hand side %r; treating it as right", side)
            side = "right"
        self.side: str = side
        self.size: str = size or self.config.default_hand_size
        self.size_factor: float = hand_size_factor(self.size, self.config)

        self.rest: Positions = {
            f: x * self.size_factor for f, x in self.config.rest_positions.items()
        }
        self.weights: dict[int, float] = dict(self.config.finger_weights)
        self.black_bias: dict[int, float] = dict(self.config.black_key_bias)

        configured = self.config.search_depth if depth is None else depth
        self.depth: int = clamp_depth(configured)
        if self.depth != configured:
            logger.debug("Search depth %s clamped to %d", configured, self.depth)

        self.current_positions: Positions = dict(self.rest)
        self.position_history: list[Positions] = []

    def __repr__(self) -> str:
        return (
            f"HandState(side={self.side!r}, size={self.size!r}, "
            f"factor={self.size_factor:.2f}, depth={self.depth})"
        )

    def set_anchor(
        self,
        fingering: Sequence[int],
        notes: Sequence[Note | None],
        index: int,
    ) -> Positions:
        """Re-derive ``current_positions`` from one known finger position.

        Leaves the positions unchanged when ``fingering[index]`` is 0 or
        ``notes[index]`` is missing.
        """
        positions = anchored(self.rest, fingering, notes, index)
        if positions is not None:
            self.current_positions = positions
        return self.current_positions

    def record_positions(self) -> None:
        """Append a snapshot of the current finger positions to the history."""
        self.position_history.append(dict(self.current_positions))
