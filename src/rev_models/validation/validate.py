"""
Model validation.

validate_model() runs the field validator chains for the fields an operation
is about to write, then the model's own hooks:

    class Booking(Model):
        def validate(self, result: ModelValidationResult) -> None:
            if self.end < self.start:
                result.add_model_error("Booking ends before it starts", "bad_range")

        async def validate_async(self, result: ModelValidationResult) -> None:
            ...
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rev_models.validation.result import ModelValidationResult
from rev_models.validation.validators import get_validators, required_validator

if TYPE_CHECKING:
    from rev_models.models.model import Model
    from rev_models.models.registry import ModelRegistry
    from rev_models.operations.result import OperationName

logger = logging.getLogger(__name__)


async def validate_model(
    registry: ModelRegistry,
    model: Model,
    operation: OperationName,
    fields: Sequence[str] | None = None,
) -> ModelValidationResult:
    """
    Validate a model instance.

    Args:
        registry: Registry holding the model's metadata
        model: Instance to validate
        operation: Operation the validation is for
        fields: Field names to validate (default: all declared fields)

    Returns:
        ModelValidationResult with per-field detail
    """
    meta = registry.get_metadata(model)
    result = ModelValidationResult()
    names = list(fields) if fields is not None else meta.field_names

    for name in names:
        field = meta.get_field(name)
        if field is None:
            result.add_model_error(
                f"Field '{name}' does not exist in {meta.name}",
                "extra_field",
                {"field": name},
            )
            continue
        value = model.get(name)
        required_validator(field, value, result)
        if value is None:
            continue
        for validator in get_validators(field):
            validator(field, value, result)

    hook = getattr(model, "validate", None)
    if callable(hook):
        hook(result)
    async_hook = getattr(model, "validate_async", None)
    if callable(async_hook):
        outcome = async_hook(result)
        if inspect.isawaitable(outcome):
            await outcome

    if not result.valid:
        logger.debug(
            "%s %s validation failed: %s",
            meta.name,
            operation,
            sorted(result.field_errors),
        )
    return result
