"""create() operation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from rev_models.errors import ValidationError
from rev_models.logging import log_with_context
from rev_models.models.model import Model
from rev_models.models.registry import ModelRegistry
from rev_models.operations.common import finish
from rev_models.operations.options import CreateOptions, coerce_options
from rev_models.operations.result import ModelOperation, ModelOperationResult
from rev_models.validation.validate import validate_model

logger = logging.getLogger(__name__)


async def create(
    registry: ModelRegistry,
    model: Model,
    options: CreateOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Any]:
    """
    Apply field defaults, validate a model instance and store it through its backend.

    Args:
        registry: Registry the model is registered with
        model: Instance to create
        options: CreateOptions or a mapping of option values

    Returns:
        Successful result; ``result.result`` holds the stored instance

    Raises:
        RegistrationError: If the model or its backend is not registered
        ValidationError: If field validation fails (backend not called)
        OperationError: If the backend reported errors
    """
    meta = registry.get_metadata(model)
    opts = coerce_options(CreateOptions, options)
    backend = registry.get_backend(meta.backend)
    meta.apply_defaults(model)

    result: ModelOperationResult[Any] = ModelOperationResult(ModelOperation("create"))
    if opts.validate:
        result.validation = await validate_model(registry, model, "create")
        if not result.validation.valid:
            log_with_context(
                logger,
                logging.INFO,
                "create() failed validation",
                model=meta.name,
                fields=sorted(result.validation.field_errors),
            )
            raise ValidationError(result)

    await backend.create(registry, model, opts, result)
    return finish(meta, result)
