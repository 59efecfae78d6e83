"""Tests for annotation tables."""

from handspan.fingering_engine.annotate import process_tracks, sample_tracks
from handspan.report import annotations_to_frame, finger_usage, tracks_to_annotations


def test_tracks_to_annotations_and_usage():
    rows = tracks_to_annotations(process_tracks(sample_tracks(), "M"))
    assert len(rows) == 29
    assert rows[0]["onset_time"] == 0.0

    usage = finger_usage(rows)
    assert list(usage.columns) == [0, 1, 2, 3, 4, 5]
    assert int(usage.loc["R"].sum()) == 18
    assert int(usage.loc["L"].sum()) == 11
    assert int(usage.loc["R", 0]) == 0


def test_annotations_to_frame_columns():
    df = annotations_to_frame([{"onset_time": 0.0, "pitch": 60, "hand": "R", "finger": 1, "cost": 0.5}])
    assert list(df.columns) == ["Onset (s)", "Pitch", "Hand", "Finger", "Cost"]
    assert df.iloc[0]["Finger"] == 1


def test_malformed_blocks_are_skipped():
    notes = [{"note": p, "start": i * 0.5, "duration": 0.5} for i, p in enumerate([60, 62, 64])]
    data = process_tracks({"tracksV2": {"right": [None, {"notes": notes + ["x"]}, {"notes": None}], "left": "?"}}, "M")
    rows = tracks_to_annotations(data)
    assert [r["pitch"] for r in rows] == [60, 62, 64]
    assert all(r["finger"] in range(1, 6) for r in rows)
