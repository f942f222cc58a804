"""Configuration objects and helpers for the detector.

:class:`DetectorConfig` is an immutable dataclass; derived configs are built
with its ``with_*`` methods. YAML descriptors can be loaded and saved through
:func:`load_detector_config` and :func:`save_detector_config`.
"""

from .detector_config import DEFAULT_CONFIG, DetectorConfig, load_detector_config, save_detector_config

__all__ = ["DEFAULT_CONFIG", "DetectorConfig", "load_detector_config", "save_detector_config"]
