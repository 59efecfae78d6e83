"""Tests for the hand physical model."""

import logging

import pytest

from handspan.fingering_engine.hand_model import HandState, clamp_depth, hand_size_factor
from handspan.fingering_engine.note_model import Note


def test_size_factor_scales_rest_geometry():
    hand = HandState(size="XXS")
    assert hand.size_factor == pytest.approx(0.80)
    assert hand.rest[1] == pytest.approx(-5.6)
    assert hand.rest[3] == pytest.approx(0.0)
    assert hand.rest[5] == pytest.approx(4.48)


def test_size_labels_are_case_insensitive():
    assert hand_size_factor("xl") == pytest.approx(1.10)


def test_unknown_size_falls_back_to_unit_factor(caplog):
    with caplog.at_level(logging.WARNING):
        hand = HandState(size="XXXL")
    assert hand.size_factor == 1.0
    assert "Unknown hand size" in caplog.text


def test_default_size_is_medium():
    assert HandState().size_factor == pytest.approx(1.0)


@pytest.mark.parametrize("configured, expected", [(1, 3), (3, 3), (5, 5), (9, 9), (20, 9)])
def test_depth_is_clamped(configured, expected):
    assert clamp_depth(configured) == expected
    assert HandState(depth=configured).depth == expected


def test_set_anchor_projects_every_finger():
    hand = HandState(size="M")
    notes = [Note(pitch=64)]
    positions = hand.set_anchor([3], notes, 0)
    assert positions[1] == pytest.approx(57.0)
    assert positions[2] == pytest.approx(61.2)
    assert positions[3] == pytest.approx(64.0)
    assert positions[4] == pytest.approx(66.8)
    assert positions[5] == pytest.approx(69.6)


def test_set_anchor_ignores_unassigned_finger():
    hand = HandState()
    before = dict(hand.current_positions)
    hand.set_anchor([0], [Note(pitch=70)], 0)
    assert hand.current_positions == before


def test_unknown_side_is_treated_as_right():
    assert HandState(side="middle").side == "right"
