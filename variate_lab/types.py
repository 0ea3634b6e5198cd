"""
types.py - Core Data Structures and Type Definitions for Variate Lab

This module defines the small set of value types shared across variate_lab:
- ValidationRule: Closed enumeration of parameter validation rules
- ErrorKind: Discriminator carried by every library error
- ValidationResult: Result-or-error wrapper returned by ``check``
- TraceRecord: One step of an FML random walk

Design Principles:
-----------------
1. Immutability for value objects (frozen dataclasses)
2. Clear type discrimination (enums instead of ad-hoc strings)
3. Numpy-style docstrings throughout

Example Usage:
-------------
    >>> from variate_lab.types import ValidationRule
    >>> from variate_lab.validation import check
    >>>
    >>> result = check(0.3, ValidationRule.PROBABILITY)
    >>> result.ok
    True
    >>> result.unwrap()
    0.3
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, MutableMapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import VariateError


# =============================================================================
# TYPE ALIASES
# =============================================================================

# A sampler bound to its parameters: takes a sample count, returns variates.
SamplerCallable = Callable[[int], np.ndarray]

# Secure byte source: count -> that many random bytes.
ByteSource = Callable[[int], bytes]

# Zero-argument probability generator used by the FML walk.
ProbabilityFunc = Callable[[], float]

# Caller-owned trace mapping for the FML walk, keyed "{sample}_{step}".
Trace = MutableMapping[str, "TraceRecord"]


# =============================================================================
# VALIDATION RULES
# =============================================================================

class ValidationRule(str, Enum):
    """
    Parameter validation rules.

    The value of each member is the short tag historically used to name the
    rule, so ``ValidationRule("nn")`` is ``ValidationRule.NON_NEGATIVE``.

    COUNT: number of variates; non-zero whole number, finite.
    PROBABILITY: real number in [0, 1].
    POSITIVE: finite real strictly greater than 0.
    REAL: any finite real.
    NON_NEGATIVE: finite real >= 0.
    NON_NEGATIVE_INTEGER: finite whole number >= 0.
    """
    COUNT = "n"
    PROBABILITY = "p"
    POSITIVE = "pos"
    REAL = "r"
    NON_NEGATIVE = "nn"
    NON_NEGATIVE_INTEGER = "nni"


class ErrorKind(str, Enum):
    """Discriminator for the failure kinds raised by variate_lab."""
    MISSING_OR_INVALID_COUNT = "missing_or_invalid_count"
    INVALID_PROBABILITY = "invalid_probability"
    INVALID_POSITIVE = "invalid_positive"
    INVALID_REAL = "invalid_real"
    INVALID_NON_NEGATIVE = "invalid_non_negative"
    INVALID_NON_NEGATIVE_INTEGER = "invalid_non_negative_integer"
    CONFLICTING_PARAMETERS = "conflicting_parameters"
    RANGE_INCONSISTENCY = "range_inconsistency"
    NON_WHOLE_OR_SUBUNIT_SIZE = "non_whole_or_subunit_size"
    ENTROPY_FAILURE = "entropy_failure"


# =============================================================================
# VALIDATION RESULT
# =============================================================================

@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a single parameter.

    Exactly one of ``value`` / ``error`` is meaningful: when ``error`` is
    None the parameter passed and ``value`` holds its normalized form.

    Parameters
    ----------
    value : Any
        The normalized parameter value (None on failure).
    error : VariateError, optional
        The failure, if the parameter was rejected.

    Examples
    --------
    >>> result = check(-1, ValidationRule.POSITIVE, name="rate")
    >>> result.ok
    False
    >>> result.kind
    <ErrorKind.INVALID_POSITIVE: 'invalid_positive'>
    """
    value: Any = None
    error: Optional["VariateError"] = None

    @property
    def ok(self) -> bool:
        """True if the parameter passed validation."""
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """The error kind, or None on success."""
        return None if self.error is None else self.error.kind

    def unwrap(self) -> Any:
        """
        Return the validated value, raising the stored error on failure.

        Raises
        ------
        VariateError
            The error captured during validation.
        """
        if self.error is not None:
            raise self.error
        return self.value


# =============================================================================
# FML TRACE
# =============================================================================

MORE_PROBLEMS = "One more problem"
FEWER_PROBLEMS = "One fewer problem"


@dataclass(frozen=True)
class TraceRecord:
    """
    One step of an FML random walk.

    Parameters
    ----------
    position : int or float
        Walk position after the step (the number of outstanding problems).
    probability : float
        Probability of moving away from the origin used for this variate.
    outcome : str
        ``"One more problem"`` or ``"One fewer problem"``.
    """
    position: float
    probability: float
    outcome: str

    @property
    def moved_away(self) -> bool:
        """True if this step moved away from the origin."""
        return self.outcome == MORE_PROBLEMS
