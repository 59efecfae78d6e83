"""Tests for the command-line entry point."""

import json

from handspan.fingering_engine.annotate import sample_tracks
from handspan.main import main


def test_sample_run(tmp_path, capsys):
    assert main(["--sample", "-o", str(tmp_path), "--table"]) == 0
    data = json.loads((tmp_path / "sample_data_updated.json").read_text(encoding="utf-8"))
    assert data["tracksV2"]["right"][0]["notes"][0]["finger"] == 1
    assert "Finger" in capsys.readouterr().out


def test_track_file(tmp_path):
    src = tmp_path / "song.json"
    src.write_text(json.dumps(sample_tracks()), encoding="utf-8")
    assert main([str(src), "--hand-size", "S", "--depth", "4"]) == 0
    assert (tmp_path / "song_updated.json").exists()


def test_missing_input_file(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 1


def test_table_with_malformed_blocks(tmp_path, capsys):
    notes = [{"note": p, "start": i * 0.5, "duration": 0.5, "chordID": "a1"} for i, p in enumerate([60, 62, 64, 65])]
    src = tmp_path / "messy.json"
    src.write_text(json.dumps({"tracksV2": {"right": [None, {"notes": notes}]}}), encoding="utf-8")
    assert main([str(src), "--table"]) == 0
    assert "Finger" in capsys.readouterr().out
