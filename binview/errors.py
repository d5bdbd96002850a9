"""
Exceptions raised by the binview rendering core.
"""


class BinviewError(Exception):
    """Base class for binview errors."""


class ConfigInvariantViolation(BinviewError, ValueError):
    """Printer configuration can not produce a valid dump (e.g. group size 0)."""


class ReadError(BinviewError, OSError):
    """Reading from the byte source failed."""
