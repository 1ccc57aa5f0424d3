"""remove() operation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from rev_models.models.model import Model
from rev_models.models.registry import ModelRegistry
from rev_models.operations.common import finish, resolve_where
from rev_models.operations.options import RemoveOptions, coerce_options
from rev_models.operations.result import ModelOperation, ModelOperationResult


async def remove(
    registry: ModelRegistry,
    model: Model,
    options: RemoveOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Any]:
    """
    Remove matching records.

    Without ``options.where`` the record is matched on the instance's primary
    key value. Pass ``{"where": {}}`` to remove every record of the model.

    Returns:
        Successful result; ``meta["totalCount"]`` is the number of records removed

    Raises:
        RegistrationError: If the model or its backend is not registered
        UsageError: On a missing where clause for a keyless model or an unset
            primary key
        OperationError: If the backend reported errors
    """
    meta = registry.get_metadata(model)
    opts = coerce_options(RemoveOptions, options)
    where = resolve_where("remove", meta, model, opts.where)
    backend = registry.get_backend(meta.backend)
    opts = replace(opts, where=where)

    result: ModelOperationResult[Any] = ModelOperationResult(ModelOperation("remove", where))
    await backend.remove(registry, model, opts, result)
    return finish(meta, result)
