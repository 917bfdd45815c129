"""
Exceptions and warning categories raised by the patch indexer and scrambler.
"""

from __future__ import annotations


class ScramblerError(ValueError):
    """Base class for invalid inputs to the indexer or the scrambler."""


class InvalidPatchDimension(ScramblerError):
    pass


class InvalidBoundaryPolicy(ScramblerError):
    pass


class UnsupportedDimensionality(ScramblerError):
    pass


class FieldShapeMismatch(ScramblerError):
    pass


class InvalidObservationCount(ScramblerError):
    pass


class InvalidArgument(ScramblerError):
    pass


class ScramblerWarning(UserWarning):
    pass


class SingletonDimensionWarning(ScramblerWarning):
    pass


class DebugModeWarning(ScramblerWarning):
    pass


__all__ = [
    "ScramblerError",
    "InvalidPatchDimension",
    "InvalidBoundaryPolicy",
    "UnsupportedDimensionality",
    "FieldShapeMismatch",
    "InvalidObservationCount",
    "InvalidArgument",
    "ScramblerWarning",
    "SingletonDimensionWarning",
    "DebugModeWarning",
]
