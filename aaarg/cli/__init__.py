# aaarg/cli/__init__.py

"""
Command-line driver for aaarg.
"""

from .main import cli

__all__ = ["cli"]
