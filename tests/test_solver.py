"""Tests for the windowed fingering search."""

import dataclasses

import pytest

from handspan.config import default_config
from handspan.fingering_engine.annotate import sample_tracks
from handspan.fingering_engine.hand_model import HandState
from handspan.fingering_engine.note_model import Note, normalize
from handspan.fingering_engine.solver import NO_CANDIDATE_COST, generate, optimize_window, run_sequence


def run_of(pitches, step=0.5, duration=0.5):
    return [Note(pitch=p, time=i * step, duration=duration) for i, p in enumerate(pitches)]


def fingers(notes):
    return [n.fingering for n in notes]


def test_ascending_run_right_hand():
    notes = run_sequence(run_of([60, 62, 64, 65, 67]), "M", side="right", depth=9)
    assert fingers(notes) == [1, 2, 3, 4, 5]
    assert notes[0].cost == pytest.approx(2.4697, abs=1e-4)
    assert notes[3].cost == pytest.approx(1.6667, abs=1e-4)


def test_descending_run_right_hand():
    notes = run_sequence(run_of([67, 65, 64, 62, 60]), "M")
    assert fingers(notes) == [5, 4, 3, 2, 1]


def test_left_hand_is_mirrored_after_search():
    hand = HandState(side="left", size="M", depth=9)
    assert fingers(generate(hand, run_of([60, 62, 64, 65, 67]))) == [1, 2, 3, 4, 5]

    notes = run_sequence(run_of([60, 62, 64, 65, 67]), "M", side="left", depth=9)
    assert fingers(notes) == [5, 4, 3, 2, 1]


def test_optimize_window_first_window():
    fingering, cost = optimize_window(HandState(), run_of([60, 62, 64, 65, 67]))
    assert fingering == [1, 2, 3, 4, 5]
    assert cost == pytest.approx(2.4697, abs=1e-4)


def test_optimize_window_respects_forced_start():
    fingering, _ = optimize_window(HandState(), run_of([62, 64, 65, 67]), start_finger=2)
    assert fingering == [2, 3, 4, 5]


def test_ties_go_to_lowest_fingering():
    # Repeated key: every legal candidate costs nothing.
    fingering, cost = optimize_window(HandState(), run_of([60, 60]))
    assert fingering == [1, 1]
    assert cost == 0.0


def test_window_with_no_legal_candidate():
    # Little finger cannot move right onto a black key by any rule.
    fingering, cost = optimize_window(HandState(), run_of([67, 68]), start_finger=5)
    assert fingering == [0, 0]
    assert cost == NO_CANDIDATE_COST


def test_empty_sequence_is_noop():
    assert run_sequence([], "M") == []


def test_single_note_stays_unassigned():
    notes = run_sequence(run_of([60]), "M")
    assert fingers(notes) == [0]
    assert notes[0].cost is None


def test_three_note_sequence_is_fully_assigned():
    notes = run_sequence(run_of([60, 62, 64]), "M", depth=3)
    assert 0 not in fingers(notes)


def test_trailing_note_without_fill_keeps_zero():
    config = dataclasses.replace(default_config(), fill_trailing_note=False)
    notes = run_sequence(run_of([60, 62, 64, 65, 67]), "M", config=config)
    assert fingers(notes) == [1, 2, 3, 4, 0]


def test_range_invariant_and_determinism():
    records = sample_tracks()["tracksV2"]["right"][0]["notes"]
    first = run_sequence([normalize(r) for r in records], "S")
    second = run_sequence([normalize(r) for r in records], "S")
    assert all(n.fingering in range(6) for n in first)
    assert fingers(first) == fingers(second)
    assert [n.cost for n in first] == [n.cost for n in second]


def test_sample_passage_right_hand():
    records = sample_tracks()["tracksV2"]["right"][0]["notes"]
    notes = run_sequence([normalize(r) for r in records], "M")
    assert fingers(notes) == [1, 2, 3, 4, 5, 4, 3, 2, 1, 2, 1, 2, 3, 4, 5, 1, 2, 3]


@pytest.mark.parametrize("low, high", [(1, 3), (20, 9)])
def test_depth_clamp_matches_bounds(low, high):
    records = sample_tracks()["tracksV2"]["left"][0]["notes"]
    a = run_sequence([normalize(r) for r in records], "M", depth=low)
    b = run_sequence([normalize(r) for r in records], "M", depth=high)
    assert fingers(a) == fingers(b)
    assert [n.cost for n in a] == [n.cost for n in b]


def test_configured_depth_is_not_mutated():
    hand = HandState(depth=9)
    generate(hand, run_of([60, 62, 64]))
    assert hand.depth == 9


def test_position_history_records_each_step():
    hand = HandState()
    generate(hand, run_of([60, 62, 64, 65, 67]))
    assert len(hand.position_history) == 4
    # last committed step anchors finger 4 on F4
    assert hand.position_history[-1][4] == pytest.approx(65.0)


def test_hand_size_changes_cost():
    small = run_sequence(run_of([60, 62, 64, 65, 67]), "XXS")
    large = run_sequence(run_of([60, 62, 64, 65, 67]), "XXL")
    assert fingers(large) == [1, 2, 3, 4, 5]
    assert large[0].cost == pytest.approx(3.3045, abs=1e-4)
    assert small[0].cost != large[0].cost
