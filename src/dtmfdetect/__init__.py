"""DTMF keypad tone detection for multi-channel PCM audio.

The :mod:`analysis` package holds the Goertzel detector and the streaming
analyzer, :mod:`config` the detector settings, :mod:`dataio` the sample
sources, and :mod:`tools` the command-line scanner and debug hooks.
"""

from .analysis.analyzer import Analyzer, ConfigMismatchError, DtmfChange, detect_dtmf_changes
from .analysis.detector import Detector
from .analysis.keys import PHONE_KEYS, PhoneKey
from .analysis.tones import DtmfTone, to_dtmf_tones
from .config.detector_config import DEFAULT_CONFIG, DetectorConfig
from .dataio.samples import AudioData, Samples, StreamSamples

__version__ = "0.1.0"

__all__ = [
    "Analyzer",
    "AudioData",
    "ConfigMismatchError",
    "DEFAULT_CONFIG",
    "Detector",
    "DetectorConfig",
    "DtmfChange",
    "DtmfTone",
    "PHONE_KEYS",
    "PhoneKey",
    "Samples",
    "StreamSamples",
    "detect_dtmf_changes",
    "to_dtmf_tones",
]
