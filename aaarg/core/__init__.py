# aaarg/core/__init__.py

"""
Core Processing Package for aaarg.

Contains modules for:
- Sample sources and output buffers
- Signal blocks (alias, stutter)
- Audio file I/O glue
"""

from . import errors
from . import source
from . import buffer
from . import blocks
from . import audio

__all__ = [
    "errors",
    "source",
    "buffer",
    "blocks",
    "audio",
]
