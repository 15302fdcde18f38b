# aaarg/core/audio/__init__.py

"""
Core Audio Package.

Decodes audio files into sample sources and writes output buffers to disk.
"""

from . import io

__all__ = [
    "io",
]
