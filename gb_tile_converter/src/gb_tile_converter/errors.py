"""Exceptions and warning categories raised during conversion."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for fatal conversion errors."""


class UsageError(ConversionError):
    """Raised for malformed command lines (bad numbers, too many files...)."""


class InputError(ConversionError):
    """Raised when the input PNG cannot be used."""


class ResolutionWarning(UserWarning):
    """An option could not be honoured as given and was corrected."""


class CapacityWarning(UserWarning):
    """The converted data exceeds a Game Boy hardware limit."""
