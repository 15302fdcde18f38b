# aaarg/core/blocks/stutter.py

"""
Implementation of the stutter block: short windows of audio repeated in place.
"""

import logging
import numbers
from typing import Tuple, Union

import numpy as np
from numpy.typing import NDArray

from ..buffer import OutputBuffer
from ..errors import InvalidParameters, EmptySource, ArithmeticUnderflow
from ..source import SampleSource, duration_to_samples
from .base import SignalBlock, RandomLike

logger = logging.getLogger(__name__)

CountRange = Union[int, Tuple[int, int]]
TimeRange = Union[float, Tuple[float, float]]


def _as_range(value, name: str, integral: bool = False) -> tuple:
    """Normalizes a scalar or (low, high) pair into a validated inclusive range."""
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise InvalidParameters(f"{name} must be a (low, high) pair, got {value!r}.")
        low, high = value
    else:
        low = high = value
    for bound in (low, high):
        if integral and (not isinstance(bound, numbers.Integral) or isinstance(bound, bool)):
            raise InvalidParameters(f"{name} bounds must be integers, got {value!r}.")
        if not isinstance(bound, numbers.Real):
            raise InvalidParameters(f"{name} bounds must be numbers, got {value!r}.")
        if bound < 0:
            raise InvalidParameters(f"{name} bounds must be non-negative, got {value!r}.")
    if low > high:
        raise InvalidParameters(f"{name} lower bound exceeds upper bound: {value!r}.")
    if integral:
        return int(low), int(high)
    return float(low), float(high)


def stutter_in_place(
    samples: NDArray[np.float64],
    location: int,
    duration: int,
    piece_length: int,
) -> int:
    """
    Repeats the piece at `location` forward until `duration` samples are covered.

    The piece is taken from the content at `location` before any write and
    stamped at location, location + piece_length, ... The last copy is
    truncated so nothing is written at or past len(samples).

    Args:
        samples: Buffer to modify in place.
        location: Start index of the stutter.
        duration: Number of samples the stutter should cover.
        piece_length: Length of the repeated piece (>= 1 when duration > 0).

    Returns:
        The number of samples written.
    """
    n_samples = len(samples)
    # Snapshot the piece before any write overlaps it
    piece = samples[location:location + piece_length].copy()
    stuttered = 0
    while stuttered < duration:
        start = location + stuttered
        # Truncate the last copy at the buffer end
        length = min(len(piece), n_samples - start)
        if length <= 0:
            break
        samples[start:start + length] = piece[:length]
        stuttered += length
    return stuttered


class StutterBlock(SignalBlock):
    """
    Adds stutters to the sound.

    A random point in the sound is picked and the next `stutter_piece_length`
    of audio is repeated until `stutter_duration` of audio has been covered.
    This is done `stutter_count` times. Each parameter is an inclusive
    (low, high) range and a value is drawn uniformly from it: the count once
    per call, duration and piece length once per stutter.

    Args:
        stutter_count: Range of how many stutters to place. An upper bound of 0
                       disables the block.
        stutter_duration: Range of how long each stutter lasts, in seconds.
        stutter_piece_length: Range of how long each repeated piece lasts, in seconds.
        rng: Random generator or seed.
        preserve_metadata: Keep the source's channels/sample rate on output.

    Raises:
        InvalidParameters: If a range is malformed.
    """

    def __init__(
        self,
        stutter_count: CountRange = (0, 0),
        stutter_duration: TimeRange = (0.0, 0.0),
        stutter_piece_length: TimeRange = (0.0, 0.0),
        rng: RandomLike = None,
        preserve_metadata: bool = False,
    ):
        super().__init__(rng=rng, preserve_metadata=preserve_metadata)
        self._stutter_count = _as_range(stutter_count, "stutter_count", integral=True)
        self._stutter_duration = _as_range(stutter_duration, "stutter_duration")
        self._stutter_piece_length = _as_range(stutter_piece_length, "stutter_piece_length")

    @property
    def stutter_count(self) -> Tuple[int, int]:
        return self._stutter_count

    @property
    def stutter_duration(self) -> Tuple[float, float]:
        return self._stutter_duration

    @property
    def stutter_piece_length(self) -> Tuple[float, float]:
        return self._stutter_piece_length

    def _draw_seconds(self, bounds: Tuple[float, float]) -> float:
        low, high = bounds
        if low == high:
            return low
        # uniform() excludes high; once floored to samples the gap is under one sample.
        return float(self._rng.uniform(low, high))

    def process(self, source: SampleSource) -> OutputBuffer:
        # --- Materialize ---
        samples = source.collect()
        sample_rate = source.sample_rate

        if self._stutter_count[1] == 0:
            logger.debug("Stutter count upper bound is 0, returning source unchanged.")
            return self._finalize(samples, source)

        if len(samples) == 0:
            logger.error("Cannot stutter an empty source.")
            raise EmptySource("Stutter requested but the source yielded no samples.")

        # --- Draw and place stutters ---
        count = int(self._rng.integers(self._stutter_count[0], self._stutter_count[1], endpoint=True))
        logger.info(f"Applying stutter: count={count}, duration={self._stutter_duration}s, "
                    f"piece_length={self._stutter_piece_length}s")

        for _ in range(count):
            duration = duration_to_samples(self._draw_seconds(self._stutter_duration), sample_rate)
            piece_length = duration_to_samples(self._draw_seconds(self._stutter_piece_length), sample_rate)
            # A zero-length piece would never advance the tiling
            if duration > 0 and piece_length == 0:
                piece_length = 1

            if duration > len(samples):
                logger.error(f"Stutter duration ({duration} samples) exceeds source length ({len(samples)}).")
                raise ArithmeticUnderflow(
                    f"Stutter duration of {duration} samples does not fit a source of {len(samples)} samples."
                )
            # The location range [0, 0) is empty
            if duration == len(samples):
                location = 0
            else:
                location = int(self._rng.integers(0, len(samples) - duration))

            written = stutter_in_place(samples, location, duration, piece_length)
            logger.debug(f"Stutter at {location}: duration={duration}, piece={piece_length}, wrote {written}.")

        return self._finalize(samples, source)
