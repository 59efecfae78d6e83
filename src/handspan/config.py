"""Configuration for the handspan fingering engine.

Loads the physical hand model from ``configs/hand_model.yaml`` (shipped
inside the package) and sets up logging for the command-line entry point.
No hardcoded model constants: if a required key is missing from the YAML,
a ``ValueError`` is raised with a clear message.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent / "configs" / "hand_model.yaml"

_REQUIRED_KEYS: tuple[str, ...] = (
    "hand_sizes",
    "default_hand_size",
    "rest_positions",
    "finger_weights",
    "black_key_bias",
    "search_depth",
    "time_smoothing",
    "long_note_duration",
    "thumb_hold_duration",
    "fill_trailing_note",
    "split_pitch",
    "chord_tolerance",
)

_PER_FINGER_KEYS: tuple[str, ...] = ("rest_positions", "finger_weights", "black_key_bias")


@dataclass(frozen=True)
class HandModelConfig:
    """Validated contents of a hand-model YAML file.

    Per-finger values are stored as dicts keyed by finger number (1–5).
    """

    hand_sizes: dict[str, float]
    default_hand_size: str
    rest_positions: dict[int, float]
    finger_weights: dict[int, float]
    black_key_bias: dict[int, float]
    search_depth: int
    time_smoothing: float
    long_note_duration: float
    thumb_hold_duration: float
    fill_trailing_note: bool
    split_pitch: int
    chord_tolerance: float
    source: Path | None = None


def _per_finger(cfg: dict[str, Any], key: str, config_path: Path) -> dict[int, float]:
    values = cfg[key]
    if not isinstance(values, list) or len(values) != 5:
        raise ValueError(
            f"Key '{key}' in hand config must list exactly five values "
            f"(fingers 1–5): {config_path}"
        )
    try:
        return {finger: float(v) for finger, v in enumerate(values, start=1)}
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Key '{key}' in hand config must be numeric: {config_path}") from exc


def load_config(config_path: str | Path | None = None) -> HandModelConfig:
    """Read and validate a hand-model YAML file.

    Args:
        config_path: Path to the YAML file. Defaults to the packaged
            ``configs/hand_model.yaml``.

    Returns:
        A :class:`HandModelConfig`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a required key is missing or malformed.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Hand config not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh)

    if not isinstance(cfg, dict):
        raise ValueError(f"Hand config must be a YAML mapping: {config_path}")

    for key in _REQUIRED_KEYS:
        if key not in cfg:
            raise ValueError(f"Missing required key '{key}' in hand config: {config_path}")

    hand_sizes = cfg["hand_sizes"]
    if not isinstance(hand_sizes, dict) or not hand_sizes:
        raise ValueError(f"Key 'hand_sizes' must be a non-empty mapping: {config_path}")

    per_finger = {key: _per_finger(cfg, key, config_path) for key in _PER_FINGER_KEYS}

    return HandModelConfig(
        hand_sizes={str(label).upper(): float(f) for label, f in hand_sizes.items()},
        default_hand_size=str(cfg["default_hand_size"]).upper(),
        rest_positions=per_finger["rest_positions"],
        finger_weights=per_finger["finger_weights"],
        black_key_bias=per_finger["black_key_bias"],
        search_depth=int(cfg["search_depth"]),
        time_smoothing=float(cfg["time_smoothing"]),
        long_note_duration=float(cfg["long_note_duration"]),
        thumb_hold_duration=float(cfg["thumb_hold_duration"]),
        fill_trailing_note=bool(cfg["fill_trailing_note"]),
        split_pitch=int(cfg["split_pitch"]),
        chord_tolerance=float(cfg["chord_tolerance"]),
        source=config_path,
    )


@functools.lru_cache(maxsize=1)
def default_config() -> HandModelConfig:
    """Return the packaged configuration, parsed once per process."""
    return load_config()


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for command-line use.

    The library itself never installs handlers; only the CLI calls this.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
