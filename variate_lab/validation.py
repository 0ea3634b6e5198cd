"""
validation.py - Parameter Validation Rules

Every sampler validates each of its parameters exactly once, on entry, against
one of a closed set of rules (see ``ValidationRule``). Each rule is a pure
function ``(value, name) -> value`` that either returns the normalized value or
raises the rule's error on the first failed check.

Two entry points:

- ``validate`` raises on failure (used by the samplers)
- ``check`` returns a ``ValidationResult`` instead of raising

Both substitute ``default`` when ``value`` is None and a default is given,
without running any checks.

Example Usage:
-------------
    >>> from variate_lab.validation import validate, check
    >>> from variate_lab.types import ValidationRule
    >>>
    >>> validate(None, ValidationRule.PROBABILITY, default=0.5)
    0.5
    >>> validate(10.0, ValidationRule.COUNT)
    10
    >>> check(1.5, ValidationRule.PROBABILITY).ok
    False
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Callable, Dict, Optional, Union

from loguru import logger

from .errors import (
    VariateError,
    MissingOrInvalidCount,
    InvalidProbability,
    InvalidPositive,
    InvalidReal,
    InvalidNonNegative,
    InvalidNonNegativeInteger,
)
from .types import ValidationRule, ValidationResult


# =============================================================================
# PRIMITIVE CHECKS
# =============================================================================

def is_numeric(value: Any) -> bool:
    """True for real numbers other than bool and NaN."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def is_whole(value: Any) -> bool:
    """
    True if a numeric value has no fractional part.

    Infinities count as whole so that the finiteness check, which runs later,
    is the one that reports them.
    """
    if isinstance(value, numbers.Integral):
        return True
    return math.isinf(value) or float(value).is_integer()


def _fail(error_cls, message: str, name: str) -> None:
    raise error_cls(message, parameter=name)


# =============================================================================
# RULES
# =============================================================================

def _count(value: Any, name: str) -> int:
    if value is not None and is_numeric(value) and value == 0:
        _fail(MissingOrInvalidCount, "You must specify how many values you want", name)
    if not is_numeric(value):
        _fail(MissingOrInvalidCount, "The number of values must be numeric", name)
    if not is_whole(value):
        _fail(MissingOrInvalidCount, "The number of values must be a whole number", name)
    if value < 0:
        _fail(MissingOrInvalidCount, "The number of values must be a whole number greater than 0", name)
    if math.isinf(value):
        _fail(MissingOrInvalidCount, "The number of values cannot be infinite", name)
    return int(value)


def _probability(value: Any, name: str) -> float:
    if not is_numeric(value):
        _fail(InvalidProbability, "Probability value is missing or not a number", name)
    if value > 1:
        _fail(InvalidProbability, "Probability values cannot be greater than 1", name)
    if value < 0:
        _fail(InvalidProbability, "Probability values cannot be less than 0", name)
    return value


def _positive(value: Any, name: str) -> float:
    if not is_numeric(value):
        _fail(InvalidPositive, "A required parameter is missing or not a number", name)
    if value <= 0:
        _fail(InvalidPositive, "Parameter must be greater than 0", name)
    if math.isinf(value):
        _fail(InvalidPositive, "Parameter cannot be infinite", name)
    return value


def _real(value: Any, name: str) -> float:
    if not is_numeric(value):
        _fail(InvalidReal, "A required parameter is missing or not a number", name)
    if math.isinf(value):
        _fail(InvalidReal, "Parameter cannot be infinite", name)
    return value


def _non_negative(value: Any, name: str) -> float:
    if not is_numeric(value):
        _fail(InvalidNonNegative, "A required parameter is missing or not a number", name)
    if value < 0:
        _fail(InvalidNonNegative, "Parameter cannot be less than 0", name)
    if math.isinf(value):
        _fail(InvalidNonNegative, "Parameter cannot be infinite", name)
    return value


def _non_negative_integer(value: Any, name: str) -> int:
    if not is_numeric(value):
        _fail(InvalidNonNegativeInteger, "A required parameter is missing or not a number", name)
    if not is_whole(value):
        _fail(InvalidNonNegativeInteger, "Parameter must be a whole number", name)
    if value < 0:
        _fail(InvalidNonNegativeInteger, "Parameter cannot be less than 0", name)
    if math.isinf(value):
        _fail(InvalidNonNegativeInteger, "Parameter cannot be infinite", name)
    return int(value)


_RULES: Dict[ValidationRule, Callable[[Any, str], Any]] = {
    ValidationRule.COUNT: _count,
    ValidationRule.PROBABILITY: _probability,
    ValidationRule.POSITIVE: _positive,
    ValidationRule.REAL: _real,
    ValidationRule.NON_NEGATIVE: _non_negative,
    ValidationRule.NON_NEGATIVE_INTEGER: _non_negative_integer,
}


# =============================================================================
# PUBLIC API
# =============================================================================

def _apply(value: Any, rule: Union[ValidationRule, str], default: Any, name: Optional[str]) -> Any:
    rule = ValidationRule(rule)
    if value is None and default is not None:
        return default
    return _RULES[rule](value, name or rule.value)


def validate(
    value: Any,
    rule: Union[ValidationRule, str],
    default: Any = None,
    name: Optional[str] = None
) -> Any:
    """
    Validate a single parameter, substituting a default when it is unset.

    Parameters
    ----------
    value : Any
        The caller-supplied value; None means "not supplied".
    rule : ValidationRule or str
        Rule to apply. Short tags (``"n"``, ``"p"``, ``"pos"``, ``"r"``,
        ``"nn"``, ``"nni"``) are accepted.
    default : Any, optional
        Returned unchecked when ``value`` is None.
    name : str, optional
        Parameter name used in error messages. Defaults to the rule tag.

    Returns
    -------
    Any
        The normalized value. COUNT and NON_NEGATIVE_INTEGER return ``int``;
        the other rules return the value unchanged.

    Raises
    ------
    VariateError
        The rule's error subclass, on the first failed check.
    """
    try:
        return _apply(value, rule, default, name)
    except VariateError as exc:
        logger.error(f"Invalid parameter '{exc.parameter}' ({value!r}): {exc}")
        raise


def check(
    value: Any,
    rule: Union[ValidationRule, str],
    default: Any = None,
    name: Optional[str] = None
) -> ValidationResult:
    """
    Validate a parameter and return the outcome instead of raising.

    Rejections are logged at DEBUG rather than ERROR.

    Examples
    --------
    >>> result = check(0, ValidationRule.COUNT, name="n")
    >>> result.kind
    <ErrorKind.MISSING_OR_INVALID_COUNT: 'missing_or_invalid_count'>
    >>> result.error.parameter
    'n'
    """
    try:
        return ValidationResult(value=_apply(value, rule, default, name))
    except VariateError as exc:
        logger.debug(f"check: parameter '{exc.parameter}' ({value!r}) rejected: {exc}")
        return ValidationResult(error=exc)
