"""
test_validation.py - Tests for Parameter Validation

Tests cover:
- Each validation rule's checks and their order
- Default substitution
- Normalization and idempotence
- The result-or-error form (check)
"""

import math

import pytest
import numpy as np

from variate_lab import (
    validate,
    check,
    ValidationRule,
    ErrorKind,
    VariateError,
    MissingOrInvalidCount,
    InvalidProbability,
    InvalidPositive,
    InvalidReal,
    InvalidNonNegative,
    InvalidNonNegativeInteger,
)


class TestDefaults:
    """Default substitution happens before any check."""

    def test_default_returned_when_unset(self):
        assert validate(None, ValidationRule.PROBABILITY, default=0.5) == 0.5

    def test_default_is_not_checked(self):
        assert validate(None, ValidationRule.POSITIVE, default=-1) == -1

    def test_supplied_value_wins(self):
        assert validate(0.2, ValidationRule.PROBABILITY, default=0.5) == 0.2

    def test_unset_without_default_fails(self):
        with pytest.raises(InvalidProbability, match="missing"):
            validate(None, ValidationRule.PROBABILITY)

    def test_string_tags(self):
        assert validate(3, "n") == 3
        assert validate(None, "nn", 1) == 1

    def test_unknown_tag(self):
        with pytest.raises(ValueError):
            validate(1, "bogus")


class TestValidateCount:
    """COUNT: not zero; numeric; integral; non-negative; not infinite."""

    def test_valid(self):
        assert validate(10, ValidationRule.COUNT) == 10

    def test_float_whole_number_normalized(self):
        result = validate(10.0, ValidationRule.COUNT)
        assert result == 10
        assert isinstance(result, int)

    def test_numpy_integer(self):
        assert validate(np.int64(7), ValidationRule.COUNT) == 7

    @pytest.mark.parametrize("value, message", [
        (0, "how many"),
        (0.0, "how many"),
        (None, "numeric"),
        ("5", "numeric"),
        (float("nan"), "numeric"),
        (True, "numeric"),
        (2.5, "whole number"),
        (-3, "greater than 0"),
        (-math.inf, "greater than 0"),
        (math.inf, "infinite"),
    ])
    def test_invalid(self, value, message):
        with pytest.raises(MissingOrInvalidCount, match=message):
            validate(value, ValidationRule.COUNT, name="n")

    def test_parameter_name_recorded(self):
        with pytest.raises(MissingOrInvalidCount) as excinfo:
            validate(0, ValidationRule.COUNT, name="cap")
        assert excinfo.value.parameter == "cap"


class TestValidateProbability:
    """PROBABILITY: numeric; <= 1; >= 0."""

    @pytest.mark.parametrize("value", [0, 0.0, 0.25, 1, 1.0, np.float64(0.5)])
    def test_valid(self, value):
        assert validate(value, ValidationRule.PROBABILITY) == value

    @pytest.mark.parametrize("value, message", [
        (None, "missing or not a number"),
        ("0.5", "missing or not a number"),
        (float("nan"), "missing or not a number"),
        (1.0001, "greater than 1"),
        (math.inf, "greater than 1"),
        (-0.1, "less than 0"),
    ])
    def test_invalid(self, value, message):
        with pytest.raises(InvalidProbability, match=message):
            validate(value, ValidationRule.PROBABILITY)


class TestValidatePositive:
    """POSITIVE: numeric; > 0; not infinite."""

    @pytest.mark.parametrize("value", [1e-12, 1, 3.5])
    def test_valid(self, value):
        assert validate(value, ValidationRule.POSITIVE) == value

    @pytest.mark.parametrize("value, message", [
        (None, "missing or not a number"),
        (0, "greater than 0"),
        (-2.0, "greater than 0"),
        (math.inf, "infinite"),
    ])
    def test_invalid(self, value, message):
        with pytest.raises(InvalidPositive, match=message):
            validate(value, ValidationRule.POSITIVE)


class TestValidateReal:
    """REAL: numeric; not infinite."""

    @pytest.mark.parametrize("value", [-1e300, -2, 0, 3.25])
    def test_valid(self, value):
        assert validate(value, ValidationRule.REAL) == value

    @pytest.mark.parametrize("value, message", [
        (None, "missing or not a number"),
        ([1.0], "missing or not a number"),
        (math.inf, "infinite"),
        (-math.inf, "infinite"),
    ])
    def test_invalid(self, value, message):
        with pytest.raises(InvalidReal, match=message):
            validate(value, ValidationRule.REAL)


class TestValidateNonNegative:
    """NON_NEGATIVE: numeric; >= 0; not infinite."""

    @pytest.mark.parametrize("value", [0, 0.0, 2.5])
    def test_valid(self, value):
        assert validate(value, ValidationRule.NON_NEGATIVE) == value

    @pytest.mark.parametrize("value, message", [
        (None, "missing or not a number"),
        (-0.5, "less than 0"),
        (math.inf, "infinite"),
    ])
    def test_invalid(self, value, message):
        with pytest.raises(InvalidNonNegative, match=message):
            validate(value, ValidationRule.NON_NEGATIVE)


class TestValidateNonNegativeInteger:
    """NON_NEGATIVE_INTEGER: numeric; integral; >= 0; not infinite."""

    @pytest.mark.parametrize("value", [0, 1, 12.0])
    def test_valid(self, value):
        result = validate(value, ValidationRule.NON_NEGATIVE_INTEGER)
        assert result == value
        assert isinstance(result, int)

    @pytest.mark.parametrize("value, message", [
        (None, "missing or not a number"),
        (1.5, "whole number"),
        (-1, "less than 0"),
        (-math.inf, "less than 0"),
        (math.inf, "infinite"),
    ])
    def test_invalid(self, value, message):
        with pytest.raises(InvalidNonNegativeInteger, match=message):
            validate(value, ValidationRule.NON_NEGATIVE_INTEGER)


class TestIdempotence:
    """Re-validating a valid value returns it unchanged."""

    @pytest.mark.parametrize("rule, value", [
        (ValidationRule.COUNT, 4.0),
        (ValidationRule.PROBABILITY, 0.3),
        (ValidationRule.POSITIVE, 2.5),
        (ValidationRule.REAL, -7.25),
        (ValidationRule.NON_NEGATIVE, 0.0),
        (ValidationRule.NON_NEGATIVE_INTEGER, 9),
    ])
    def test_revalidate(self, rule, value):
        once = validate(value, rule)
        twice = validate(once, rule)

        assert once == value
        assert twice == once
        assert type(twice) is type(once)


class TestCheck:
    """check() reports failures as values."""

    def test_ok(self):
        result = check(5.0, ValidationRule.COUNT)

        assert result.ok
        assert result.kind is None
        assert result.unwrap() == 5

    def test_default(self):
        assert check(None, ValidationRule.REAL, default=0).value == 0

    def test_failure(self):
        result = check(-1, ValidationRule.POSITIVE, name="rate")

        assert not result.ok
        assert result.kind == ErrorKind.INVALID_POSITIVE
        assert result.error.parameter == "rate"
        with pytest.raises(InvalidPositive):
            result.unwrap()

    def test_rejection_logged_at_debug(self, log_records):
        check(0, ValidationRule.COUNT, name="n")

        levels = [r["level"].name for r in log_records]
        assert "ERROR" not in levels
        assert "DEBUG" in levels

    def test_validate_logs_error(self, log_records):
        with pytest.raises(MissingOrInvalidCount):
            validate(0, ValidationRule.COUNT, name="n")

        assert [r["level"].name for r in log_records] == ["ERROR"]

    @pytest.mark.parametrize("rule, value, kind", [
        (ValidationRule.COUNT, 0, ErrorKind.MISSING_OR_INVALID_COUNT),
        (ValidationRule.PROBABILITY, 2, ErrorKind.INVALID_PROBABILITY),
        (ValidationRule.POSITIVE, 0, ErrorKind.INVALID_POSITIVE),
        (ValidationRule.REAL, math.inf, ErrorKind.INVALID_REAL),
        (ValidationRule.NON_NEGATIVE, -1, ErrorKind.INVALID_NON_NEGATIVE),
        (ValidationRule.NON_NEGATIVE_INTEGER, 0.5, ErrorKind.INVALID_NON_NEGATIVE_INTEGER),
    ])
    def test_each_rule_has_its_own_kind(self, rule, value, kind):
        result = check(value, rule)

        assert result.kind == kind
        assert isinstance(result.error, VariateError)
        assert isinstance(result.error, ValueError)
