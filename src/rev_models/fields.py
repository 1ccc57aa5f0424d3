"""
Field specification types.

A model's shape is an ordered list of FieldSpec objects handed to the
registry. Constraint coherence (min <= max, applicable constraints, valid
selections) is checked when the model is registered.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Field Kinds
# =============================================================================


class FieldKind(StrEnum):
    """Semantic field types."""

    TEXT = "text"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECTION = "selection"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    AUTO_NUMBER = "auto_number"  # Backend-assigned integer key


STRING_KINDS = frozenset({FieldKind.TEXT, FieldKind.EMAIL, FieldKind.URL, FieldKind.PASSWORD})
NUMERIC_KINDS = frozenset({FieldKind.INTEGER, FieldKind.NUMBER, FieldKind.AUTO_NUMBER})
TEMPORAL_KINDS = frozenset({FieldKind.DATE, FieldKind.TIME, FieldKind.DATETIME})


# =============================================================================
# Fields
# =============================================================================


class FieldSpec(BaseModel):
    """
    Field specification for a model.

    Attributes:
        name: Field identifier
        kind: Semantic field type
        label: Human-readable label
        required: Whether a value must be present
        primary_key: Whether this field identifies a record
        default: Value assigned to new instances
        min_value / max_value: Numeric bounds
        min_length / max_length: String length bounds
        regex: Pattern string values must match
        selection: Allowed (value, label) pairs for selection fields
        multiple: Selection fields hold a list of values
    """

    name: str = Field(description="Field name")
    kind: FieldKind = Field(description="Semantic field type")
    label: str | None = Field(default=None, description="Human-readable label")
    required: bool = Field(default=True, description="Is a value required?")
    primary_key: bool = Field(default=False, description="Is this the primary key?")
    default: Any | None = Field(default=None, description="Default value")
    min_value: int | float | None = Field(default=None, description="Minimum numeric value")
    max_value: int | float | None = Field(default=None, description="Maximum numeric value")
    min_length: int | None = Field(default=None, description="Minimum string length")
    max_length: int | None = Field(default=None, description="Maximum string length")
    regex: str | None = Field(default=None, description="Pattern for string values")
    selection: list[tuple[str, str]] | None = Field(
        default=None, description="Allowed (value, label) pairs"
    )
    multiple: bool = Field(default=False, description="Selection holds a list of values")

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure field name is a valid identifier."""
        if not v.isidentifier():
            raise ValueError(f"Field name '{v}' must be a valid identifier")
        return v

    @property
    def selection_values(self) -> list[str]:
        return [value for value, _ in self.selection or []]


# =============================================================================
# Convenience Constructors
# =============================================================================


def _field(kind: FieldKind, name: str, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name=name, kind=kind, **kwargs)


def text_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.TEXT, name, **kwargs)


def email_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.EMAIL, name, **kwargs)


def url_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.URL, name, **kwargs)


def password_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.PASSWORD, name, **kwargs)


def integer_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.INTEGER, name, **kwargs)


def number_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.NUMBER, name, **kwargs)


def boolean_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.BOOLEAN, name, **kwargs)


def selection_field(name: str, selection: list[tuple[str, str]], **kwargs: Any) -> FieldSpec:
    """Selection field, e.g. ``selection_field("gender", [("m", "Male"), ("f", "Female")])``."""
    return _field(FieldKind.SELECTION, name, selection=selection, **kwargs)


def date_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.DATE, name, **kwargs)


def time_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.TIME, name, **kwargs)


def datetime_field(name: str, **kwargs: Any) -> FieldSpec:
    return _field(FieldKind.DATETIME, name, **kwargs)


def auto_number_field(name: str, **kwargs: Any) -> FieldSpec:
    """Integer key assigned by the backend on create."""
    kwargs.setdefault("required", False)
    return _field(FieldKind.AUTO_NUMBER, name, **kwargs)


__all__ = [
    "FieldKind",
    "FieldSpec",
    "NUMERIC_KINDS",
    "STRING_KINDS",
    "TEMPORAL_KINDS",
    "auto_number_field",
    "boolean_field",
    "date_field",
    "datetime_field",
    "email_field",
    "integer_field",
    "number_field",
    "password_field",
    "selection_field",
    "text_field",
    "time_field",
    "url_field",
]
