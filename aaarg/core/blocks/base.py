# aaarg/core/blocks/base.py

"""
Defines the SignalBlock interface shared by every effect.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from ..buffer import OutputBuffer, OUTPUT_CHANNELS, OUTPUT_SAMPLE_RATE
from ..source import SampleSource

logger = logging.getLogger(__name__)

RandomLike = Union[np.random.Generator, int, None]


class SignalBlock(ABC):
    """
    Abstract base class for signal blocks.

    A block processes a source into a new OutputBuffer. It reads the source
    once and keeps no state between calls apart from its random generator,
    so one block can process many sources.

    Args:
        rng: A numpy Generator, an integer seed, or None for fresh entropy.
        preserve_metadata: If False (default), output is stamped with
            OUTPUT_CHANNELS / OUTPUT_SAMPLE_RATE regardless of the input.
            If True, the source's channel count and sample rate are kept.
    """

    def __init__(self, rng: RandomLike = None, preserve_metadata: bool = False):
        self._rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self._preserve_metadata = bool(preserve_metadata)

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    @property
    def preserve_metadata(self) -> bool:
        return self._preserve_metadata

    @abstractmethod
    def process(self, source: SampleSource) -> OutputBuffer:
        """Process the given `source`, returning a transformed copy of it."""
        pass

    def _finalize(self, samples: NDArray[np.float64], source: SampleSource) -> OutputBuffer:
        """Wraps processed samples into an OutputBuffer with the configured stamp."""
        if self._preserve_metadata:
            return OutputBuffer(samples, channels=source.channels, sample_rate=source.sample_rate)
        if source.channels != OUTPUT_CHANNELS or source.sample_rate != OUTPUT_SAMPLE_RATE:
            logger.debug(f"Re-stamping output from {source.channels} ch / {source.sample_rate} Hz "
                         f"to {OUTPUT_CHANNELS} ch / {OUTPUT_SAMPLE_RATE} Hz.")
        return OutputBuffer(samples, channels=OUTPUT_CHANNELS, sample_rate=OUTPUT_SAMPLE_RATE)
