"""
Exception hierarchy.

Everything raised on purpose by the package derives from ThreesTDError, so
callers can catch the whole family at once.
"""

__all__ = [
    "ThreesTDError",
    "ConfigError",
    "InvalidCellError",
    "WeightFileError",
    "CorruptWeightFileError",
    "TrainerStateError",
]


class ThreesTDError(Exception):
    """Base class for package errors."""


class ConfigError(ThreesTDError, ValueError):
    """Invalid configuration value or network layout."""


class InvalidCellError(ThreesTDError, ValueError):
    """Board cell value does not fit in a 4-bit field."""


class WeightFileError(ThreesTDError, OSError):
    """Weight file could not be opened, read or written."""


class CorruptWeightFileError(WeightFileError):
    """Weight file contents do not match the expected layout."""


class TrainerStateError(ThreesTDError, RuntimeError):
    """Trainer method called in the wrong lifecycle state."""
