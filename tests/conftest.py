"""Shared fixtures."""

import pretty_midi
import pytest


@pytest.fixture
def write_midi():
    """Return a helper that writes ``(pitch, start, end)`` notes plus one drum hit."""

    def _write(path, notes):
        pm = pretty_midi.PrettyMIDI()
        piano = pretty_midi.Instrument(program=0)
        for pitch, start, end in notes:
            piano.notes.append(pretty_midi.Note(velocity=90, pitch=pitch, start=start, end=end))
        pm.instruments.append(piano)
        drums = pretty_midi.Instrument(program=0, is_drum=True)
        drums.notes.append(pretty_midi.Note(velocity=90, pitch=36, start=0.0, end=0.1))
        pm.instruments.append(drums)
        pm.write(str(path))
        return path

    return _write
