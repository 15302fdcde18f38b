# aaarg/core/buffer.py

"""
The output side of every signal block.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .source import SampleSource

logger = logging.getLogger(__name__)

# Fixed stamp applied to block output unless metadata preservation is requested.
OUTPUT_CHANNELS = 2
OUTPUT_SAMPLE_RATE = 44100


class OutputBuffer:
    """
    A finalized, randomly indexable sample buffer.

    Samples are interleaved float64 values. The buffer owns its array; it can
    be written to a file, re-wrapped as a new source with `as_source()` for
    chaining into another block, or discarded.

    Attributes:
        samples: 1D float64 array of interleaved samples.
        channels: Channel count stamped on the buffer.
        sample_rate: Sample rate (Hz) stamped on the buffer.
    """

    def __init__(
        self,
        samples: NDArray[np.float64],
        channels: int = OUTPUT_CHANNELS,
        sample_rate: int = OUTPUT_SAMPLE_RATE,
    ):
        samples = np.asarray(samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ValueError(f"Output samples must be a 1D array, got shape {samples.shape}")
        self.samples = samples
        self.channels = int(channels)
        self.sample_rate = int(sample_rate)

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, index):
        return self.samples[index]

    def __iter__(self):
        return iter(self.samples)

    @property
    def duration(self) -> float:
        """Playback duration in seconds, counting all interleaved channels."""
        return len(self.samples) / float(self.sample_rate * self.channels)

    def as_source(self) -> SampleSource:
        """Re-wraps the buffer as a new source carrying this buffer's stamp."""
        return SampleSource(self.samples.copy(), sample_rate=self.sample_rate, channels=self.channels)

    def __repr__(self) -> str:
        return (f"OutputBuffer(len={len(self.samples)}, channels={self.channels}, "
                f"sample_rate={self.sample_rate})")
