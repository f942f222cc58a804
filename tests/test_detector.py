import numpy as np
import pytest

from dtmfdetect.analysis.detector import Detector, _find_max_two
from dtmfdetect.analysis.keys import PHONE_KEYS, PhoneKey
from dtmfdetect.config.detector_config import DEFAULT_CONFIG

from dtmf_signals import BLOCK_SIZE, interleave, sine, tone_block


def _detect(samples: np.ndarray, channels: int = 1) -> list:
    return Detector(channels, DEFAULT_CONFIG).detect(samples)


@pytest.mark.parametrize("key", PHONE_KEYS, ids=lambda k: k.symbol)
def test_detects_all_phone_keys(key: PhoneKey) -> None:
    assert _detect(tone_block(key)) == [key]


def test_can_be_reused() -> None:
    detector = Detector(1, DEFAULT_CONFIG)
    detector.detect(tone_block(PhoneKey.THREE))

    assert detector.detect(tone_block(PhoneKey.C)) == [PhoneKey.C]
    assert detector.detect(np.zeros(BLOCK_SIZE)) == [PhoneKey.NONE]


def test_supports_stereo() -> None:
    block = interleave(tone_block(PhoneKey.ONE), tone_block(PhoneKey.TWO))
    assert _detect(block, channels=2) == [PhoneKey.ONE, PhoneKey.TWO]


def test_supports_quad_channel() -> None:
    block = interleave(
        tone_block(PhoneKey.ONE),
        tone_block(PhoneKey.TWO),
        tone_block(PhoneKey.THREE),
        tone_block(PhoneKey.FOUR),
    )
    assert _detect(block, channels=4) == [
        PhoneKey.ONE,
        PhoneKey.TWO,
        PhoneKey.THREE,
        PhoneKey.FOUR,
    ]


def test_silent_channel_next_to_tone() -> None:
    block = interleave(np.zeros(BLOCK_SIZE, dtype=np.float32), tone_block(PhoneKey.HASH))
    assert _detect(block, channels=2) == [PhoneKey.NONE, PhoneKey.HASH]


def test_silence_is_none() -> None:
    assert _detect(np.zeros(BLOCK_SIZE)) == [PhoneKey.NONE]


@pytest.mark.parametrize("amplitude", [0.02, 0.05, 0.1, 0.25, 0.5, 1.0])
@pytest.mark.parametrize("key", [PhoneKey.ONE, PhoneKey.FIVE, PhoneKey.C, PhoneKey.HASH], ids=lambda k: k.symbol)
def test_detects_keys_at_any_level(key: PhoneKey, amplitude: float) -> None:
    high, low = key.tones
    block = sine(high, BLOCK_SIZE, amplitude=amplitude) + sine(low, BLOCK_SIZE, amplitude=amplitude)
    assert _detect(block) == [key]


@pytest.mark.parametrize("kind", ["uniform", "normal"])
def test_full_scale_noise_is_none(kind: str) -> None:
    rng = np.random.default_rng(1234)
    if kind == "uniform":
        blocks = rng.uniform(-1.0, 1.0, size=(1000, BLOCK_SIZE))
    else:
        blocks = rng.standard_normal(size=(1000, BLOCK_SIZE))

    detector = Detector(1, DEFAULT_CONFIG)
    detected = [key for block in blocks for key in detector.detect(block)]
    assert set(detected) == {PhoneKey.NONE}


def test_quiet_noise_is_none() -> None:
    rng = np.random.default_rng(4321)
    assert _detect(1e-4 * rng.standard_normal(BLOCK_SIZE)) == [PhoneKey.NONE]


def test_single_frequency_is_none() -> None:
    assert _detect(sine(697, BLOCK_SIZE)) == [PhoneKey.NONE]
    assert _detect(sine(1633, BLOCK_SIZE)) == [PhoneKey.NONE]


def test_two_low_tones_are_ambiguous() -> None:
    block = sine(697, BLOCK_SIZE) + sine(770, BLOCK_SIZE) + sine(1336, BLOCK_SIZE)
    assert _detect(block) == [PhoneKey.NONE]


def test_two_high_tones_are_ambiguous() -> None:
    block = sine(852, BLOCK_SIZE) + sine(1209, BLOCK_SIZE) + sine(1477, BLOCK_SIZE)
    assert _detect(block) == [PhoneKey.NONE]


def test_nan_samples_yield_none() -> None:
    block = tone_block(PhoneKey.SIX)
    block[10] = np.nan
    assert _detect(block) == [PhoneKey.NONE]

    raw = Detector(1, DEFAULT_CONFIG.with_normalize_response(False).with_threshold(100.0))
    assert raw.detect(block) == [PhoneKey.NONE]


def test_short_final_block_still_detects() -> None:
    assert _detect(tone_block(PhoneKey.FIVE)[:150]) == [PhoneKey.FIVE]


def test_empty_block_is_none_for_every_channel() -> None:
    assert _detect(np.empty(0), channels=3) == [PhoneKey.NONE] * 3


def test_raw_responses_use_raw_threshold() -> None:
    raw_cfg = DEFAULT_CONFIG.with_normalize_response(False)
    block = tone_block(PhoneKey.NINE)

    # Raw responses of a 0.5-amplitude tone are in the thousands.
    assert Detector(1, raw_cfg.with_threshold(100.0)).detect(block) == [PhoneKey.NINE]
    assert Detector(1, raw_cfg.with_threshold(1e6)).detect(block) == [PhoneKey.NONE]


def test_rejects_invalid_construction() -> None:
    with pytest.raises(ValueError):
        Detector(0, DEFAULT_CONFIG)
    with pytest.raises(ValueError):
        Detector(1.5, DEFAULT_CONFIG)
    with pytest.raises(TypeError):
        Detector(1, None)


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        ([1.0, 1.0, 1.0, 1.0], (0, 1)),
        ([0.0, 2.0, 2.0, 1.0], (1, 2)),
        ([3.0, 1.0, 2.0, 5.0], (3, 0)),
        ([1.0, 2.0, 3.0, 4.0], (3, 2)),
        ([4.0, 3.0, 2.0, 1.0], (0, 1)),
        ([0.0, 1.0, 0.5, 0.0], (1, 2)),
        ([float("nan"), 1.0, 0.0, 0.0], (0, 1)),
    ],
)
def test_find_max_two_prefers_lower_index_on_ties(values, expected) -> None:
    assert _find_max_two(values) == expected
