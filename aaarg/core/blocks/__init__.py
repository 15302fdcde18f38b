# aaarg/core/blocks/__init__.py

"""
Signal blocks, that process a given input signal.
"""

from .base import SignalBlock
from .alias import AliasBlock
from .stutter import StutterBlock, stutter_in_place

__all__ = [
    "SignalBlock",
    "AliasBlock",
    "StutterBlock",
    "stutter_in_place",
]
