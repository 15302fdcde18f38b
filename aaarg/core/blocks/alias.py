# aaarg/core/blocks/alias.py

"""
Implementation of the aliasing (decimation) block.
"""

import logging
import math
import numbers

import numpy as np

from ..buffer import OutputBuffer
from ..errors import InvalidParameters
from ..source import SampleSource
from .base import SignalBlock, RandomLike

logger = logging.getLogger(__name__)

# Without jitter the source window must span four times target_duration * factor
# for the output to reach target_duration. Found empirically, origin unknown.
_NO_JITTER_WINDOW_MULTIPLIER = 4

# Number of jittered steps drawn from the generator at a time.
_STEP_CHUNK_SIZE = 4096


class AliasBlock(SignalBlock):
    """
    A block that speeds up the input audio, creating aliasing artifacts.

    Samples are taken every `factor + v` positions, where `v` is a random
    integer in [-factor_variation, factor_variation] drawn anew for each
    sample taken. A step that comes out negative is clamped to 0, which
    repeats the current sample.

    Args:
        factor: How much the audio is sped up (integer >= 1). 1 leaves the
                speed unchanged, 2 doubles it. Large values create audible
                aliasing.
        factor_variation: Maximum random deviation of each step (integer >= 0).
        target_duration: Maximum length of the output in seconds. If the
                         processed audio is shorter, it is left as is.
        rng: Random generator or seed used for the step jitter.
        preserve_metadata: Keep the source's channels/sample rate on output.

    Raises:
        InvalidParameters: If any parameter is out of range.

    Example:
        >>> src = SampleSource.from_array(np.arange(44100.0), sample_rate=44100)
        >>> out = AliasBlock(factor=2, target_duration=1.0).process(src)
        >>> out[:3]
        array([0., 2., 4.])
    """

    def __init__(
        self,
        factor: int = 1,
        factor_variation: int = 0,
        target_duration: float = 1.0,
        rng: RandomLike = None,
        preserve_metadata: bool = False,
    ):
        super().__init__(rng=rng, preserve_metadata=preserve_metadata)
        if not isinstance(factor, numbers.Integral) or isinstance(factor, bool):
            raise InvalidParameters(f"factor must be an integer, got {factor!r}.")
        if factor < 1:
            raise InvalidParameters(f"factor must be >= 1, got {factor}.")
        if not isinstance(factor_variation, numbers.Integral) or isinstance(factor_variation, bool):
            raise InvalidParameters(f"factor_variation must be an integer, got {factor_variation!r}.")
        if factor_variation < 0:
            raise InvalidParameters(f"factor_variation must be non-negative, got {factor_variation}.")
        if target_duration < 0:
            raise InvalidParameters(f"target_duration must be non-negative, got {target_duration}.")
        self._factor = int(factor)
        self._factor_variation = int(factor_variation)
        self._target_duration = float(target_duration)

    @property
    def factor(self) -> int:
        return self._factor

    @property
    def factor_variation(self) -> int:
        return self._factor_variation

    @property
    def target_duration(self) -> float:
        return self._target_duration

    def process(self, source: SampleSource) -> OutputBuffer:
        logger.info(f"Applying alias: factor={self._factor}, variation={self._factor_variation}, "
                    f"target_duration={self._target_duration}s")

        # --- No-jitter path: plain decimation of an oversized window ---
        if self._factor_variation == 0:
            window_seconds = self._target_duration * self._factor * _NO_JITTER_WINDOW_MULTIPLIER
            window = np.fromiter(source.take_duration(window_seconds), dtype=np.float64)
            aliased = window[::self._factor].copy()
        else:
            # --- Jittered path ---
            aliased = self._jittered(source)

        logger.debug(f"Alias produced {len(aliased)} samples.")
        return self._finalize(aliased, source)

    def _jittered(self, source: SampleSource) -> np.ndarray:
        # Desired output length; only a maximum if the window runs out first
        target_sample_count = int(math.floor(self._target_duration * source.sample_rate))
        window = np.fromiter(source.take_duration(self._target_duration * self._factor), dtype=np.float64)

        # --- Cursor walk ---
        # Steps are drawn in bounded chunks, so memory follows the window
        # actually read rather than target_duration.
        out = []
        steps = np.empty(0, dtype=np.int64)
        step_idx = 0
        i = 0
        while len(out) < target_sample_count:
            if i >= len(window):
                break
            out.append(window[i])

            if step_idx == len(steps):
                chunk = min(target_sample_count - len(out) + 1, _STEP_CHUNK_SIZE)
                steps = self._rng.integers(
                    -self._factor_variation, self._factor_variation, size=chunk, endpoint=True
                )
                steps += self._factor
                np.maximum(steps, 0, out=steps)  # A step of 0 repeats the sample
                step_idx = 0

            # Advance the cursor by the jittered step
            i += int(steps[step_idx])
            step_idx += 1

        if len(out) < target_sample_count:
            logger.debug(f"Cursor ran off the window after {len(out)} of {target_sample_count} samples.")
        return np.asarray(out, dtype=np.float64)
