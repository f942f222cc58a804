from __future__ import annotations

import numpy as np
import pytest

from dtmfdetect.dataio.samples import AudioData, StreamSamples


def test_audio_data_reads_in_order_until_exhausted() -> None:
    data = AudioData(np.arange(10), channels=2, sample_rate=8000)

    np.testing.assert_array_equal(data.read(4), [0, 1, 2, 3])
    assert data.position == pytest.approx(2 / 8000)
    np.testing.assert_array_equal(data.read(4), [4, 5, 6, 7])
    np.testing.assert_array_equal(data.read(4), [8, 9])
    assert data.read(4).size == 0
    assert data.position == pytest.approx(5 / 8000)


def test_audio_data_flattens_frames() -> None:
    frames = np.array([[1.0, -1.0], [2.0, -2.0], [3.0, -3.0]])
    data = AudioData(frames, channels=2, sample_rate=8000)

    assert len(data) == 6
    np.testing.assert_array_equal(data.read(6), [1.0, -1.0, 2.0, -2.0, 3.0, -3.0])


def test_audio_data_validates_layout() -> None:
    with pytest.raises(ValueError):
        AudioData(np.zeros(4), channels=0, sample_rate=8000)
    with pytest.raises(ValueError):
        AudioData(np.zeros(4), channels=1, sample_rate=0)
    with pytest.raises(ValueError):
        AudioData(np.zeros((4, 3)), channels=2, sample_rate=8000)
    with pytest.raises(ValueError):
        AudioData(np.zeros((2, 2, 2)), channels=2, sample_rate=8000)


def test_stream_samples_recuts_chunks() -> None:
    chunks = [np.arange(0, 3), np.arange(3, 10), np.arange(10, 11)]
    source = StreamSamples(chunks, channels=1, sample_rate=8000)

    np.testing.assert_array_equal(source.read(4), [0, 1, 2, 3])
    np.testing.assert_array_equal(source.read(4), [4, 5, 6, 7])
    np.testing.assert_array_equal(source.read(4), [8, 9, 10])
    assert source.read(4).size == 0


def test_stream_samples_accepts_frame_chunks() -> None:
    chunks = iter([np.array([[1.0, 2.0], [3.0, 4.0]]), np.array([[5.0, 6.0]])])
    source = StreamSamples(chunks, channels=2, sample_rate=8000)

    np.testing.assert_array_equal(source.read(10), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    assert source.channels == 2
    assert source.sample_rate == 8000


def test_negative_read_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        AudioData(np.zeros(4), channels=1, sample_rate=8000).read(-1)
    with pytest.raises(ValueError):
        StreamSamples([], channels=1, sample_rate=8000).read(-1)
