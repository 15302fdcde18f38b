# tests/test_source.py

"""
Tests for SampleSource and OutputBuffer.
"""

import itertools

import pytest
import numpy as np
from numpy.testing import assert_array_equal

from aaarg.core.buffer import OutputBuffer
from aaarg.core.errors import InvalidParameters
from aaarg.core.source import SampleSource, duration_to_samples


def test_duration_to_samples():
    assert duration_to_samples(1.0, 44100) == 44100
    assert duration_to_samples(0.5, 1000, channels=2) == 1000
    assert duration_to_samples(0.0015, 1000) == 1
    with pytest.raises(InvalidParameters):
        duration_to_samples(-1.0, 1000)

def test_source_is_consumed_once():
    source = SampleSource([1.0, 2.0, 3.0], sample_rate=3)
    assert list(source) == [1.0, 2.0, 3.0]
    assert list(source) == []

def test_source_take_duration_on_infinite_source():
    source = SampleSource(itertools.count(), sample_rate=10)
    assert list(source.take_duration(0.5)) == [0, 1, 2, 3, 4]
    assert next(source) == 5

def test_source_collect_with_limit():
    source = SampleSource(range(10), sample_rate=10)
    assert_array_equal(source.collect(limit=4), [0, 1, 2, 3])
    assert_array_equal(source.collect(), [4, 5, 6, 7, 8, 9])

def test_source_from_array_interleaves_channels():
    stereo = np.array([[1.0, 2.0, 3.0], [-1.0, -2.0, -3.0]])
    source = SampleSource.from_array(stereo, sample_rate=100)
    assert source.channels == 2
    assert_array_equal(source.collect(), [1, -1, 2, -2, 3, -3])

@pytest.mark.parametrize("kwargs", [dict(sample_rate=0), dict(sample_rate=100, channels=0)])
def test_source_rejects_bad_metadata(kwargs):
    with pytest.raises(InvalidParameters):
        SampleSource([], **kwargs)

def test_output_buffer_defaults_and_indexing():
    buf = OutputBuffer(np.arange(88200.0))
    assert (buf.channels, buf.sample_rate) == (2, 44100)
    assert len(buf) == 88200
    assert buf[10] == 10.0
    assert buf.duration == pytest.approx(1.0)

def test_output_buffer_as_source_carries_stamp():
    buf = OutputBuffer(np.array([0.5, -0.5, 0.25, -0.25]), channels=2, sample_rate=8000)
    source = buf.as_source()
    assert (source.channels, source.sample_rate) == (2, 8000)
    assert_array_equal(source.collect(), buf.samples)
    # Re-wrapping does not consume the buffer
    assert len(buf) == 4

def test_output_buffer_rejects_2d():
    with pytest.raises(ValueError):
        OutputBuffer(np.zeros((2, 4)))
