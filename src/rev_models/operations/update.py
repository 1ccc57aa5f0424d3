"""update() operation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from rev_models.backends.base import get_update_fields
from rev_models.errors import ValidationError
from rev_models.logging import log_with_context
from rev_models.models.model import Model
from rev_models.models.registry import ModelRegistry
from rev_models.operations.common import check_fields, finish, resolve_where
from rev_models.operations.options import UpdateOptions, coerce_options
from rev_models.operations.result import ModelOperation, ModelOperationResult
from rev_models.validation.validate import validate_model

logger = logging.getLogger(__name__)


async def update(
    registry: ModelRegistry,
    model: Model,
    options: UpdateOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Any]:
    """
    Write field values of an instance to every matching record.

    Without ``options.where`` the records are matched on the instance's
    primary key value.

    Args:
        registry: Registry the model is registered with
        model: Instance holding the new values
        options: UpdateOptions or a mapping of option values

    Returns:
        Successful result; ``meta["totalCount"]`` is the number of records updated

    Raises:
        RegistrationError: If the model or its backend is not registered
        UsageError: On a missing where clause for a keyless model, an unset
            primary key or a malformed ``fields`` option
        ValidationError: If field validation fails (backend not called)
        OperationError: If the backend reported errors
    """
    meta = registry.get_metadata(model)
    opts = coerce_options(UpdateOptions, options)
    where = resolve_where("update", meta, model, opts.where)
    fields = check_fields(meta, opts.fields)
    backend = registry.get_backend(meta.backend)
    opts = replace(opts, where=where, fields=fields)

    result: ModelOperationResult[Any] = ModelOperationResult(ModelOperation("update", where))
    if opts.validate:
        result.validation = await validate_model(
            registry, model, "update", get_update_fields(model, meta.field_names, fields)
        )
        if not result.validation.valid:
            log_with_context(
                logger,
                logging.INFO,
                "update() failed validation",
                model=meta.name,
                fields=sorted(result.validation.field_errors),
            )
            raise ValidationError(result)

    await backend.update(registry, model, opts, result)
    return finish(meta, result)
