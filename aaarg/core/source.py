# aaarg/core/source.py

"""
Sample sources: the input side of every signal block.

A SampleSource is a pull-based, consumed-once, forward-only sequence of
samples annotated with a sample rate and a channel count. Channels are
interleaved and blocks treat them as one undifferentiated scalar sequence.
"""

import itertools
import logging
import math
from typing import Iterable, Iterator, Optional

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidParameters

logger = logging.getLogger(__name__)


def duration_to_samples(seconds: float, sample_rate: int, channels: int = 1) -> int:
    """
    Converts a time span to a sample count: floor(seconds * sample_rate * channels).

    Args:
        seconds: Time span in seconds (non-negative).
        sample_rate: Samples per second per channel.
        channels: Number of interleaved channels.

    Returns:
        The number of samples covering `seconds` of playback.
    """
    if seconds < 0:
        raise InvalidParameters(f"Duration must be non-negative, got {seconds}.")
    return int(math.floor(seconds * sample_rate * channels))


class SampleSource:
    """
    A consumed-once iterator of float samples with a known sample rate.

    The wrapped iterable may be finite or infinite. Once a sample has been
    read it cannot be read again; blocks that need random access call
    `collect()` or `take_duration(...)` and materialize a window.

    Example:
        >>> src = SampleSource.from_array(np.arange(4.0), sample_rate=4)
        >>> src.collect()
        array([0., 1., 2., 3.])
    """

    def __init__(self, samples: Iterable[float], sample_rate: int, channels: int = 1):
        if sample_rate <= 0:
            raise InvalidParameters(f"sample_rate must be positive, got {sample_rate}.")
        if channels < 1:
            raise InvalidParameters(f"channels must be at least 1, got {channels}.")
        self._samples: Iterator[float] = iter(samples)
        self.sample_rate = int(sample_rate)
        self.channels = int(channels)

    @classmethod
    def from_array(cls, data: NDArray, sample_rate: int, channels: int = 1) -> "SampleSource":
        """Wraps an in-memory array. A 2D array of shape (channels, n) is interleaved."""
        data = np.asarray(data, dtype=np.float64)
        if data.ndim == 2:
            channels = data.shape[0]
            data = data.T.reshape(-1)
        elif data.ndim != 1:
            raise ValueError(f"Input data must be 1D or 2D, got shape {data.shape}")
        return cls(data, sample_rate=sample_rate, channels=channels)

    def __iter__(self) -> "SampleSource":
        return self

    def __next__(self) -> float:
        return next(self._samples)

    def take_duration(self, seconds: float) -> Iterator[float]:
        """
        Returns an iterator over at most `seconds` of playback time.

        Playback time of interleaved samples counts every channel, so the
        window holds floor(seconds * sample_rate * channels) samples. Works on
        infinite sources; the samples read are consumed from this source.
        """
        n_samples = duration_to_samples(seconds, self.sample_rate, self.channels)
        return itertools.islice(self._samples, n_samples)

    def collect(self, limit: Optional[int] = None) -> NDArray[np.float64]:
        """
        Materializes the remaining samples (or at most `limit` of them).

        Without a limit the source must be finite.
        """
        samples = self._samples if limit is None else itertools.islice(self._samples, limit)
        data = np.fromiter(samples, dtype=np.float64)
        logger.debug(f"Materialized {len(data)} samples at {self.sample_rate} Hz.")
        return data

    def __repr__(self) -> str:
        return f"SampleSource(sample_rate={self.sample_rate}, channels={self.channels})"
