"""read() operation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rev_models.errors import UsageError
from rev_models.models.model import Model
from rev_models.models.registry import ModelRegistry
from rev_models.operations.common import check_where, finish
from rev_models.operations.options import ReadOptions, coerce_options
from rev_models.operations.result import ModelOperation, ModelOperationResult


def _check_read_options(opts: ReadOptions) -> None:
    check_where("read", opts.where)
    if isinstance(opts.offset, bool) or not isinstance(opts.offset, int) or opts.offset < 0:
        raise UsageError("read() options.offset must be a non-negative integer")
    if isinstance(opts.limit, bool) or not isinstance(opts.limit, int) or opts.limit < 1:
        raise UsageError("read() options.limit must be a positive integer")
    if opts.order_by is not None and (
        isinstance(opts.order_by, str)
        or not isinstance(opts.order_by, list | tuple)
        or not all(isinstance(entry, str) for entry in opts.order_by)
    ):
        raise UsageError("read() options.order_by must be a list of strings")


async def read(
    registry: ModelRegistry,
    model: type[Model],
    options: ReadOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Any]:
    """
    Read records of a model type.

    Args:
        registry: Registry the model is registered with
        model: Model class to read
        options: ReadOptions or a mapping of option values

    Returns:
        Successful result; ``results`` holds the page of instances and
        ``meta`` holds offset, limit and the total match count

    Raises:
        RegistrationError: If the model or its backend is not registered
        UsageError: On malformed options
        OperationError: If the backend reported errors
    """
    meta = registry.get_metadata(model)
    opts = coerce_options(ReadOptions, options)
    _check_read_options(opts)
    backend = registry.get_backend(meta.backend)

    result: ModelOperationResult[Any] = ModelOperationResult(
        ModelOperation("read", opts.where)
    )
    await backend.read(registry, meta.model, opts, result)
    return finish(meta, result)
