"""Note Model — canonical note records for the fingering search.

Incoming note records come from several sources (PianoVision-style track
JSON, MIDI extraction, hand-written dicts) and use different field names.
:func:`normalize` maps them onto one :class:`Note` and fills every missing
optional field with a default. Nothing here raises for a missing optional
field; a record without a pitch is a caller error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping


BLACK_PITCH_CLASSES: frozenset[int] = frozenset({1, 3, 6, 8, 10})
VALID_FINGERS: frozenset[int] = frozenset({0, 1, 2, 3, 4, 5})


def is_black_key(pitch: int) -> bool:
    """Return ``True`` if *pitch* falls on a black key."""
    return pitch % 12 in BLACK_PITCH_CLASSES


def key_position(pitch: int) -> float:
    """Horizontal key position used by the hand model (identity on pitch)."""
    return float(pitch)


def octave_of(pitch: int) -> int:
    """Scientific-pitch octave, so that MIDI 60 is octave 4."""
    return pitch // 12 - 1


@dataclass
class Note:
    """One musical event, annotated in place by the search.

    ``fingering`` is 0 until the search assigns a finger (1–5).
    ``cost`` is the effort score of the window that produced the
    assignment and is diagnostic only.
    """

    pitch: int
    time: float = 0.0
    duration: float = 0.0
    is_chord: bool = False
    x: float | None = None
    name: str = ""
    octave: int | None = None
    measure: int = 0
    chord_id: int = 0
    chord_nr: int = 0
    n_in_chord: int = 0
    note_id: Any = 0
    fingering: int = 0
    cost: float | None = None
    data: Mapping[str, Any] | None = field(default=None, repr=False, compare=False)
    is_black: bool = field(init=False)

    def __post_init__(self) -> None:
        self.is_black = is_black_key(self.pitch)
        if self.x is None:
            self.x = key_position(self.pitch)
        if self.octave is None:
            self.octave = octave_of(self.pitch)
        if self.fingering not in VALID_FINGERS:
            self.fingering = 0


def _first(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    # Falsy values fall through to the next synonym, then to the default.
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return default


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_finger(value: Any) -> int:
    try:
        finger = int(value)
    except (TypeError, ValueError):
        return 0
    return finger if finger in VALID_FINGERS else 0


def normalize(
    raw: Mapping[str, Any],
    position: Callable[[int], float] = key_position,
) -> Note:
    """Build a :class:`Note` from a loosely-typed note record.

    Accepted synonyms: ``note``/``pitch``, ``start``/``time``,
    ``finger``/``fingering``, ``isChord``/``is_chord``,
    ``chordID``/``chord_id``, ``noteName``/``notePitch``/``name``.

    Args:
        raw: The source record. Must carry a pitch.
        position: Keyboard geometry, pitch → horizontal key position.

    Returns:
        A new :class:`Note` referencing *raw* through ``data``. Optional
        fields that cannot be converted take their defaults.

    Raises:
        KeyError: If *raw* carries neither ``note`` nor ``pitch``.
    """
    if "note" in raw:
        pitch = int(raw["note"])
    else:
        pitch = int(raw["pitch"])

    return Note(
        pitch=pitch,
        time=_as_float(_first(raw, "start", "time", default=0.0), 0.0),
        duration=_as_float(_first(raw, "duration", default=0.0), 0.0),
        is_chord=bool(_first(raw, "isChord", "is_chord", default=False)),
        x=position(pitch),
        name=str(_first(raw, "noteName", "notePitch", "name", default="")),
        octave=_as_int(_first(raw, "octave", default=octave_of(pitch)), octave_of(pitch)),
        measure=_as_int(_first(raw, "measure", default=0), 0),
        chord_id=_as_int(_first(raw, "chordID", "chord_id", default=0), 0),
        chord_nr=_as_int(_first(raw, "chordnr", "chord_nr", default=0), 0),
        n_in_chord=_as_int(_first(raw, "NinChord", "n_in_chord", default=0), 0),
        note_id=_first(raw, "id", "note_id", default=0),
        fingering=_as_finger(_first(raw, "finger", "fingering", default=0)),
        data=raw,
    )
