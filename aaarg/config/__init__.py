# aaarg/config/__init__.py

"""
Configuration management for aaarg.

Loads configuration from TOML files, environment variables and internal
defaults into a single validated configuration object.
"""

from .models import AaargConfig
from .loaders import load_configuration

__all__ = [
    "AaargConfig",
    "load_configuration",
]
