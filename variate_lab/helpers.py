# helpers.py: Support routines used alongside the samplers.

from .types import ValidationRule
from .validation import validate


def factorial(n) -> int:
    """
    Exact factorial of a count.

    ``n`` is validated as a COUNT, so zero, negative, fractional and
    infinite inputs are rejected with ``MissingOrInvalidCount``.

    >>> factorial(5)
    120
    >>> factorial(1)
    1
    """
    n = validate(n, ValidationRule.COUNT, name="n")
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result
