"""Tests for the validation error aggregator."""

import pytest

from usermanagement.core.exceptions import FieldViolation, ValidationError
from usermanagement.core.validation import (
    DEFAULT_MESSAGE,
    ValidationErrorAggregator,
    aggregate_schema_errors,
    violation_from_schema_error,
)


class TestValidationErrorAggregator:
    def test_empty_aggregator_does_not_raise(self):
        errors = ValidationErrorAggregator()
        errors.raise_if_any()
        assert not errors
        assert len(errors) == 0

    def test_collects_all_violations_into_one_error(self):
        errors = ValidationErrorAggregator()
        errors.add("firstName", "First name is required.")
        errors.check(False, "password", "Password is too short.", "abc")
        errors.check(True, "email", "never recorded")

        with pytest.raises(ValidationError) as info:
            errors.raise_if_any()

        exc = info.value
        assert exc.message == DEFAULT_MESSAGE
        assert exc.violations == (
            FieldViolation("firstName", "First name is required."),
            FieldViolation("password", "Password is too short.", "abc"),
        )

    def test_check_returns_condition(self):
        errors = ValidationErrorAggregator()
        assert errors.check(True, "a", "m") is True
        assert errors.check(False, "b", "m") is False
        assert len(errors) == 1

    def test_extend_and_custom_message(self):
        errors = ValidationErrorAggregator()
        errors.extend([FieldViolation("a", "x"), FieldViolation("b", "y")])
        exc = errors.to_error("Bad request.")
        assert exc.message == "Bad request."
        assert len(exc.violations) == 2


class TestSchemaErrors:
    def test_location_prefix_is_stripped(self):
        v = violation_from_schema_error(
            {"type": "string_too_short", "loc": ("body", "firstName"), "msg": "too short", "input": ""}
        )
        assert v == FieldViolation("firstName", "too short", "")

    def test_nested_location_is_dotted(self):
        v = violation_from_schema_error({"type": "int_parsing", "loc": ("query", "page"), "msg": "bad", "input": "x"})
        assert v.field == "page"
        v = violation_from_schema_error({"type": "x", "loc": ("items", 0, "name"), "msg": "bad"})
        assert v.field == "items.0.name"

    def test_missing_field_has_no_attempted_value(self):
        v = violation_from_schema_error(
            {"type": "missing", "loc": ("body", "roleId"), "msg": "Field required", "input": {"a": 1}}
        )
        assert v.attempted_value is None

    def test_empty_location(self):
        v = violation_from_schema_error({"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error"})
        assert v.field == "request"

    def test_aggregate_schema_errors(self):
        exc = aggregate_schema_errors(
            [
                {"type": "missing", "loc": ("body", "firstName"), "msg": "Field required"},
                {"type": "value_error", "loc": ("body", "emailAddress"), "msg": "bad email", "input": "x"},
            ]
        )
        assert isinstance(exc, ValidationError)
        assert [v.field for v in exc.violations] == ["firstName", "emailAddress"]
