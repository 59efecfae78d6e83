"""Fingering Engine — sliding-window branch-and-bound fingering search.

Sub-package containing:
    note_model       – canonical note records and field normalisation
    hand_model       – finger rest geometry and anchor re-projection
    cost_model       – mean-velocity effort over a window
    pruning          – heuristic legality of finger transitions
    solver           – windowed search driver
    mirror           – left-hand finger remapping
    midi_parser      – MIDI loading and hand split
    feature_builder  – chord tagging for untagged sources
    annotate         – orchestrates the pipeline and exports results
"""

from .hand_model import HandState
from .mirror import mirror_finger
from .note_model import Note, normalize
from .solver import optimize_window, run_sequence

__all__ = [
    "HandState",
    "Note",
    "mirror_finger",
    "normalize",
    "optimize_window",
    "run_sequence",
]
