"""
errors.py - Exception Hierarchy for Variate Lab

Every failure raised by the library is a ``VariateError`` (itself a
``ValueError``) tagged with an ``ErrorKind``, so callers can either catch a
specific subclass or branch on ``exc.kind``.

    >>> from variate_lab import runif, RangeInconsistency
    >>> try:
    ...     runif(5, 10, 1)
    ... except RangeInconsistency as exc:
    ...     print(exc.kind.value)
    range_inconsistency
"""

from __future__ import annotations

from typing import Optional

from .types import ErrorKind


class VariateError(ValueError):
    """
    Base class for all variate_lab errors.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    parameter : str, optional
        Name of the offending parameter, when there is one.
    """

    kind: ErrorKind

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.parameter = parameter


class MissingOrInvalidCount(VariateError):
    """Count absent, zero, non-integral, negative or infinite."""
    kind = ErrorKind.MISSING_OR_INVALID_COUNT


class InvalidProbability(VariateError):
    """Probability not a number, or outside [0, 1]."""
    kind = ErrorKind.INVALID_PROBABILITY


class InvalidPositive(VariateError):
    """Value is not a finite real strictly greater than zero."""
    kind = ErrorKind.INVALID_POSITIVE


class InvalidReal(VariateError):
    """Value is not a finite real number."""
    kind = ErrorKind.INVALID_REAL


class InvalidNonNegative(VariateError):
    """Value is not a finite real >= 0."""
    kind = ErrorKind.INVALID_NON_NEGATIVE


class InvalidNonNegativeInteger(VariateError):
    """Value is not a finite whole number >= 0."""
    kind = ErrorKind.INVALID_NON_NEGATIVE_INTEGER


class ConflictingParameters(VariateError):
    """Mutually exclusive parameters were both supplied."""
    kind = ErrorKind.CONFLICTING_PARAMETERS


class RangeInconsistency(VariateError):
    """Lower bound exceeds upper bound."""
    kind = ErrorKind.RANGE_INCONSISTENCY


class NonWholeOrSubunitSize(VariateError):
    """Size is not a whole number, or is less than one."""
    kind = ErrorKind.NON_WHOLE_OR_SUBUNIT_SIZE


class EntropyError(VariateError):
    """The entropy source could not produce a draw."""
    kind = ErrorKind.ENTROPY_FAILURE
