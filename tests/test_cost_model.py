"""Tests for the window cost function."""

import pytest

from handspan.fingering_engine.cost_model import window_cost
from handspan.fingering_engine.hand_model import HandState
from handspan.fingering_engine.note_model import Note


def test_single_transition_velocity():
    hand = HandState(size="M")
    notes = [Note(pitch=60, time=0.0), Note(pitch=62, time=0.5)]
    # finger 2 projected at 60 + 4.2, travels 2.2 in 0.6 s, weight 1.0
    assert window_cost(hand, [1, 2], notes) == pytest.approx(2.2 / 0.6)


def test_black_key_bias_raises_cost():
    hand = HandState(size="M")
    notes = [Note(pitch=60, time=0.0), Note(pitch=61, time=0.5)]
    expected = (1.0 / 0.6) / (1.1 * 0.3)
    assert window_cost(hand, [1, 1], notes) == pytest.approx(expected)


def test_cost_is_mean_over_transitions():
    hand = HandState(size="M")
    notes = [Note(pitch=60, time=0.0), Note(pitch=62, time=0.5), Note(pitch=64, time=1.0)]
    first = 2.2 / 0.6
    second = 0.8 / 0.6 / 1.1
    assert window_cost(hand, [1, 2, 3], notes) == pytest.approx((first + second) / 2)


def test_simultaneous_notes_use_smoothing_floor():
    hand = HandState(size="M")
    notes = [Note(pitch=60, time=1.0), Note(pitch=64, time=1.0)]
    assert window_cost(hand, [1, 3], notes) == pytest.approx(3.0 / 0.1 / 1.1)


def test_missing_note_is_zero_cost_transition():
    hand = HandState(size="M")
    notes = [Note(pitch=60, time=0.0), None, Note(pitch=64, time=1.0)]
    assert window_cost(hand, [1, 2, 3], notes) == 0.0


def test_cost_does_not_touch_hand_positions():
    hand = HandState(size="M")
    before = dict(hand.current_positions)
    window_cost(hand, [1, 2], [Note(pitch=60), Note(pitch=62, time=0.5)])
    assert hand.current_positions == before


def test_short_window_costs_nothing():
    assert window_cost(HandState(), [1], [Note(pitch=60)]) == 0.0
