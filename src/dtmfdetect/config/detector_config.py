"""Detector configuration and YAML helpers."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

DEFAULT_SAMPLE_RATE = 8000
DEFAULT_SAMPLE_BLOCK_SIZE = 205
# Two bin-centred tones filling a block score 0.25 each.
DEFAULT_THRESHOLD = 0.1


@dataclass(frozen=True, slots=True)
class DetectorConfig:
    """
    Parameters shared by a :class:`~dtmfdetect.analysis.detector.Detector`.

    sample_rate: sampling rate of the analysed audio in Hz.
    sample_block_size: samples per channel fed to the detector per block.
    threshold: minimum response a tone needs to count as present.
    normalize_response: compare ``Goertzel.norm_response`` instead of the
    raw ``Goertzel.response`` against ``threshold``.

    The defaults (205 samples at 8 kHz, ~25.6 ms per block) match the
    classic telephony Goertzel setup.
    """

    sample_rate: int = DEFAULT_SAMPLE_RATE
    sample_block_size: int = DEFAULT_SAMPLE_BLOCK_SIZE
    threshold: float = DEFAULT_THRESHOLD
    normalize_response: bool = True

    def __post_init__(self) -> None:
        _require_positive_int("sample_rate", self.sample_rate)
        _require_positive_int("sample_block_size", self.sample_block_size)
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, numbers.Real):
            raise ValueError(f"threshold must be a number, got {self.threshold!r}")
        if not math.isfinite(self.threshold) or self.threshold <= 0:
            raise ValueError(f"threshold must be > 0, got {self.threshold}")

    @classmethod
    def default(cls) -> "DetectorConfig":
        return DEFAULT_CONFIG

    @property
    def block_duration_s(self) -> float:
        """Duration of one full block in seconds."""
        return self.sample_block_size / float(self.sample_rate)

    def with_sample_rate(self, sample_rate: int) -> "DetectorConfig":
        return replace(self, sample_rate=sample_rate)

    def with_sample_block_size(self, sample_block_size: int) -> "DetectorConfig":
        return replace(self, sample_block_size=sample_block_size)

    def with_threshold(self, threshold: float) -> "DetectorConfig":
        return replace(self, threshold=threshold)

    def with_normalize_response(self, normalize_response: bool) -> "DetectorConfig":
        return replace(self, normalize_response=normalize_response)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "DetectorConfig":
        """
        Construct a DetectorConfig from a mapping such as a parsed YAML file.

        Supported shapes::

            detector:
              sample_rate: 8000
              sample_block_size: 205
              threshold: 0.1
              normalize_response: true

        or the same keys at the top level. Unknown keys are ignored and
        missing keys fall back to the defaults.
        """
        payload: Mapping[str, Any] = mapping or {}
        block = payload.get("detector")
        if isinstance(block, Mapping):
            payload = block

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key in payload.keys() & known:
            values[key] = _coerce(key, payload[key])
        return cls(**values)

    def to_mapping(self) -> dict:
        """Serialize back into a mapping suitable for YAML."""
        return {
            "detector": {
                "sample_rate": int(self.sample_rate),
                "sample_block_size": int(self.sample_block_size),
                "threshold": float(self.threshold),
                "normalize_response": bool(self.normalize_response),
            }
        }


def _require_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")


def _coerce(key: str, value: Any) -> Any:
    """Coerce YAML scalars (which may arrive as strings) to field types."""
    try:
        if key in {"sample_rate", "sample_block_size"}:
            number = float(value)
            if not number.is_integer():
                raise ValueError
            return int(number)
        if key == "threshold":
            return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"invalid value for {key}: {value!r}") from None

    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"invalid value for {key}: {value!r}")
    return bool(value)


DEFAULT_CONFIG = DetectorConfig()


def load_detector_config(path: str | Path | None) -> DetectorConfig:
    """
    Load a detector configuration from ``path``.

    Missing files fall back to :data:`DEFAULT_CONFIG`.
    """
    if path is None:
        return DEFAULT_CONFIG
    cfg_path = Path(path)
    if not cfg_path.exists():
        return DEFAULT_CONFIG
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return DetectorConfig.from_mapping(raw)


def save_detector_config(path: str | Path, config: DetectorConfig) -> None:
    """Persist ``config`` as YAML, creating parent directories as needed."""
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(config.to_mapping(), fh, default_flow_style=False, sort_keys=False)


__all__ = [
    "DEFAULT_CONFIG",
    "DetectorConfig",
    "load_detector_config",
    "save_detector_config",
]
