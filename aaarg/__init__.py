# aaarg/__init__.py

"""
aaarg: a library for mangling audio.

Provides signal blocks that take a decoded stream of samples and return a
transformed, materialized buffer:

- AliasBlock: speeds audio up by sparse, optionally jittered sampling.
- StutterBlock: repeats short windows of audio in place.

Protect your hearing: do not wear headphones when playing processed audio
for the first time, the output may be unexpectedly loud.
"""

from .version import __version__
from .core.source import SampleSource
from .core.buffer import OutputBuffer, OUTPUT_CHANNELS, OUTPUT_SAMPLE_RATE
from .core.blocks import SignalBlock, AliasBlock, StutterBlock
from .core.errors import (
    AaargError,
    InvalidParameters,
    SourceTooShort,
    EmptySource,
    ArithmeticUnderflow,
)

__all__ = [
    "__version__",
    "SampleSource",
    "OutputBuffer",
    "OUTPUT_CHANNELS",
    "OUTPUT_SAMPLE_RATE",
    "SignalBlock",
    "AliasBlock",
    "StutterBlock",
    "AaargError",
    "InvalidParameters",
    "SourceTooShort",
    "EmptySource",
    "ArithmeticUnderflow",
]
