"""
Model metadata.

build_model_meta() turns a model class and its field specs into the
ModelMeta the registry stores, rejecting malformed declarations.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rev_models.errors import RegistrationError
from rev_models.fields import (
    NUMERIC_KINDS,
    STRING_KINDS,
    FieldKind,
    FieldSpec,
)
from rev_models.models.model import Model

# Attribute names used by the Model base class
RESERVED_FIELD_NAMES = frozenset({"fields", "get", "is_set", "to_dict", "validate", "validate_async"})


class ModelMeta(BaseModel):
    """
    Registered metadata for one model type.

    Attributes:
        name: Model name (the class name)
        model: The model class
        label: Human-readable label
        fields: Ordered field specifications
        primary_key: Primary key field name, if any
        backend: Name of the backend the model is bound to
    """

    name: str = Field(description="Model name")
    model: type[Model] = Field(description="Model class")
    label: str | None = Field(default=None, description="Human-readable label")
    fields: list[FieldSpec] = Field(default_factory=list, description="Model fields")
    primary_key: str | None = Field(default=None, description="Primary key field name")
    backend: str = Field(default="default", description="Backend name")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FieldSpec | None:
        """Get field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def has_field(self, name: str) -> bool:
        return self.get_field(name) is not None

    def apply_defaults(self, model: Model) -> None:
        """Set declared defaults on fields the instance does not set."""
        for field in self.fields:
            if field.default is not None and not model.is_set(field.name):
                default = field.default
                setattr(model, field.name, list(default) if isinstance(default, list) else default)

    def hydrate(self, data: Mapping[str, Any]) -> Model:
        """Build a model instance from a record, keeping declared fields only."""
        names = set(self.field_names)
        return self.model({k: v for k, v in data.items() if k in names})


def build_model_meta(
    model: type[Model],
    fields: Sequence[FieldSpec],
    *,
    backend: str = "default",
    label: str | None = None,
) -> ModelMeta:
    """
    Build and check the metadata for a model class.

    Raises:
        RegistrationError: If the declaration is malformed
    """
    if not isinstance(model, type) or not issubclass(model, Model):
        raise RegistrationError(f"{model!r} is not a Model subclass")
    name = model.__name__

    if isinstance(fields, str | bytes) or not isinstance(fields, Sequence) or not fields:
        raise RegistrationError(f"Model '{name}' must declare a non-empty list of fields")

    seen: set[str] = set()
    primary_key: str | None = None
    for field in fields:
        if not isinstance(field, FieldSpec):
            raise RegistrationError(f"Model '{name}' field {field!r} is not a FieldSpec")
        if field.name in seen:
            raise RegistrationError(f"Model '{name}' declares field '{field.name}' twice")
        if field.name in RESERVED_FIELD_NAMES:
            raise RegistrationError(
                f"Model '{name}' field name '{field.name}' is reserved by the Model class"
            )
        seen.add(field.name)
        if field.primary_key:
            if primary_key is not None:
                raise RegistrationError(
                    f"Model '{name}' declares more than one primary key "
                    f"('{primary_key}', '{field.name}')"
                )
            primary_key = field.name
        _check_constraints(name, field)

    return ModelMeta(
        name=name,
        model=model,
        label=label,
        fields=list(fields),
        primary_key=primary_key,
        backend=backend,
    )


def _check_constraints(model_name: str, field: FieldSpec) -> None:
    """Reject constraints that are inconsistent or do not apply to the field kind."""
    where = f"{model_name}.{field.name}"

    def fail(problem: str) -> None:
        raise RegistrationError(f"Field '{where}': {problem}")

    if (field.min_value is not None or field.max_value is not None) and (
        field.kind not in NUMERIC_KINDS
    ):
        fail(f"min_value / max_value do not apply to {field.kind} fields")
    if (
        field.min_value is not None
        and field.max_value is not None
        and field.min_value > field.max_value
    ):
        fail(f"min_value {field.min_value} is greater than max_value {field.max_value}")

    if (
        field.min_length is not None or field.max_length is not None or field.regex is not None
    ) and field.kind not in STRING_KINDS:
        fail(f"length and regex constraints do not apply to {field.kind} fields")
    for attr in ("min_length", "max_length"):
        length = getattr(field, attr)
        if length is not None and length < 0:
            fail(f"{attr} must not be negative")
    if (
        field.min_length is not None
        and field.max_length is not None
        and field.min_length > field.max_length
    ):
        fail(f"min_length {field.min_length} is greater than max_length {field.max_length}")
    if field.regex is not None:
        try:
            re.compile(field.regex)
        except re.error as e:
            fail(f"invalid regex '{field.regex}': {e}")

    if field.kind == FieldKind.SELECTION:
        if not field.selection:
            fail("selection fields must declare at least one (value, label) pair")
        if field.default is not None:
            defaults = field.default if field.multiple else [field.default]
            if not isinstance(defaults, list) or any(
                d not in field.selection_values for d in defaults
            ):
                fail(f"default {field.default!r} is not in the selection")
    elif field.selection is not None or field.multiple:
        fail(f"selection options do not apply to {field.kind} fields")
