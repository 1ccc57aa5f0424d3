"""
Field validators.

Each validator checks one aspect of a field value and records failures on a
ModelValidationResult. get_validators() returns the chain that applies to a
field spec; validators only run for values that are set (not None).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, time
from typing import Any

from rev_models.fields import STRING_KINDS, FieldKind, FieldSpec
from rev_models.validation.result import ModelValidationResult

Validator = Callable[[FieldSpec, Any, ModelValidationResult], None]

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_RE = re.compile(r"^(https?|ftp)://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def _label(field: FieldSpec) -> str:
    return field.label or field.name


# =============================================================================
# Type Validators
# =============================================================================


def string_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if not isinstance(value, str):
        result.add_field_error(field.name, f"{_label(field)} must be a string", "not_a_string")


def number_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        result.add_field_error(field.name, f"{_label(field)} must be a number", "not_a_number")


def integer_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        result.add_field_error(
            field.name, f"{_label(field)} must be an integer", "not_an_integer"
        )


def boolean_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if not isinstance(value, bool):
        result.add_field_error(field.name, f"{_label(field)} must be true or false", "not_a_boolean")


def date_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    # datetime is a date subclass
    if not isinstance(value, date) or isinstance(value, datetime):
        result.add_field_error(field.name, f"{_label(field)} must be a date", "not_a_date")


def time_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if not isinstance(value, time):
        result.add_field_error(field.name, f"{_label(field)} must be a time", "not_a_time")


def datetime_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if not isinstance(value, datetime):
        result.add_field_error(
            field.name, f"{_label(field)} must be a date and time", "not_a_datetime"
        )


# =============================================================================
# Constraint Validators
# =============================================================================


def min_length_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if field.min_length is not None and isinstance(value, str) and len(value) < field.min_length:
        result.add_field_error(
            field.name,
            f"{_label(field)} must be at least {field.min_length} characters",
            "min_string_length",
        )


def max_length_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if field.max_length is not None and isinstance(value, str) and len(value) > field.max_length:
        result.add_field_error(
            field.name,
            f"{_label(field)} must be at most {field.max_length} characters",
            "max_string_length",
        )


def min_value_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if (
        field.min_value is not None
        and isinstance(value, int | float)
        and not isinstance(value, bool)
        and value < field.min_value
    ):
        result.add_field_error(
            field.name, f"{_label(field)} must be at least {field.min_value}", "min_value"
        )


def max_value_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if (
        field.max_value is not None
        and isinstance(value, int | float)
        and not isinstance(value, bool)
        and value > field.max_value
    ):
        result.add_field_error(
            field.name, f"{_label(field)} must be at most {field.max_value}", "max_value"
        )


def regex_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if field.regex is not None and isinstance(value, str) and not re.search(field.regex, value):
        result.add_field_error(
            field.name, f"{_label(field)} is not in the expected format", "no_regex_match"
        )


def email_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if isinstance(value, str) and not EMAIL_RE.match(value):
        result.add_field_error(
            field.name, f"{_label(field)} must be a valid email address", "not_an_email"
        )


def url_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if isinstance(value, str) and not URL_RE.match(value):
        result.add_field_error(field.name, f"{_label(field)} must be a valid URL", "not_a_url")


def selection_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    allowed = field.selection_values
    if field.multiple:
        if not isinstance(value, list | tuple):
            result.add_field_error(
                field.name, f"{_label(field)} must be a list of values", "selection_not_a_list"
            )
            return
        bad = [v for v in value if v not in allowed]
    else:
        bad = [] if value in allowed else [value]
    if bad:
        result.add_field_error(
            field.name,
            f"{_label(field)} has an invalid selection",
            "no_selection_match",
            {"invalidValues": bad},
        )


# =============================================================================
# Validator Chains
# =============================================================================


_KIND_VALIDATORS: dict[FieldKind, list[Validator]] = {
    FieldKind.TEXT: [string_validator],
    FieldKind.PASSWORD: [string_validator],
    FieldKind.EMAIL: [string_validator, email_validator],
    FieldKind.URL: [string_validator, url_validator],
    FieldKind.INTEGER: [integer_validator, min_value_validator, max_value_validator],
    FieldKind.AUTO_NUMBER: [integer_validator],
    FieldKind.NUMBER: [number_validator, min_value_validator, max_value_validator],
    FieldKind.BOOLEAN: [boolean_validator],
    FieldKind.SELECTION: [selection_validator],
    FieldKind.DATE: [date_validator],
    FieldKind.TIME: [time_validator],
    FieldKind.DATETIME: [datetime_validator],
}

_STRING_CONSTRAINTS: list[Validator] = [
    min_length_validator,
    max_length_validator,
    regex_validator,
]


def get_validators(field: FieldSpec) -> list[Validator]:
    """Return the validator chain for a field spec."""
    validators = list(_KIND_VALIDATORS[field.kind])
    if field.kind in STRING_KINDS:
        validators.extend(_STRING_CONSTRAINTS)
    return validators


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str | list) and len(value) == 0)


def required_validator(field: FieldSpec, value: Any, result: ModelValidationResult) -> None:
    if field.required and field.kind != FieldKind.AUTO_NUMBER and is_missing(value):
        result.add_field_error(field.name, f"{_label(field)} is required", "required")
