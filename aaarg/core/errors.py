# aaarg/core/errors.py

"""
Exceptions raised by signal blocks.

Blocks fail fast: a failed `process` call returns no buffer and raises one of
the errors below. Retrying with the same parameters and seed gives the same
result, so callers wanting a different outcome must change the parameters.
"""


class AaargError(Exception):
    """Base class for all errors raised by aaarg."""


class InvalidParameters(AaargError, ValueError):
    """Block parameters are out of their valid domain (e.g. factor < 1, low > high)."""


class SourceTooShort(AaargError):
    """The materialized source is shorter than a drawn stutter duration."""


class EmptySource(SourceTooShort):
    """A stutter was requested on a source that yielded no samples."""


class ArithmeticUnderflow(SourceTooShort):
    """The stutter location range [0, len - duration) would underflow."""
